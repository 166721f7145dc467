"""
Card records loaded from the set catalog.

Cards are immutable. The catalog document uses Scryfall's card object
shape, plus an optional ``localImagePaths`` list for images cached next
to the catalog.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

COLOR_SYMBOLS: tuple[str, ...] = ("W", "U", "B", "R", "G")

# Lower rank sorts first
RARITY_ORDER: dict[str, int] = {
    "common": 4,
    "uncommon": 3,
    "rare": 2,
    "mythic": 1,
}
UNKNOWN_RARITY_RANK = 5


def _normal_image(record: dict[str, Any]) -> str | None:
    """Normal-size image URL from a card or face record's `image_uris`."""
    image_uris = record.get("image_uris") or {}
    if not isinstance(image_uris, dict):
        raise ValueError(f"image_uris is a {type(image_uris).__name__}, not an object")
    return image_uris.get("normal")


@dataclass(frozen=True, slots=True)
class CardFace:
    """
    One face of a multi-faced card.

    Attributes:
        name: Face name
        colors: Colors printed on this face
        image_url: Normal-size remote image for this face
    """

    name: str
    colors: tuple[str, ...] = ()
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class Card:
    """
    A card in the set being graded.

    Attributes:
        id: Unique card identifier (Scryfall id)
        name: Display name
        type_line: Full type line (e.g., "Creature — Human Monk")
        cmc: Mana value
        rarity: common, uncommon, rare, mythic (other values tolerated)
        declared_color_identity: Color identity as given by the catalog, if any
        colors: Card-level printed colors, if any
        faces: Faces of a multi-faced card (empty for normal cards)
        image_url: Normal-size remote image
        local_image_paths: Image files cached alongside the catalog
    """

    id: str
    name: str
    type_line: str = ""
    cmc: float = 0.0
    rarity: str = "common"
    declared_color_identity: frozenset[str] | None = None
    colors: tuple[str, ...] = ()
    faces: tuple[CardFace, ...] = ()
    image_url: str | None = None
    local_image_paths: tuple[str, ...] = ()

    @property
    def color_identity(self) -> frozenset[str]:
        """
        Colors used for filtering.

        The declared identity wins. Otherwise the union of every face's
        colors, and for single-faced cards the card's own colors.
        """
        if self.declared_color_identity is not None:
            return self.declared_color_identity
        if self.faces:
            return frozenset(color for face in self.faces for color in face.colors)
        return frozenset(self.colors)

    @property
    def rarity_rank(self) -> int:
        return RARITY_ORDER.get(self.rarity, UNKNOWN_RARITY_RANK)

    @classmethod
    def from_scryfall(cls, data: dict[str, Any]) -> "Card":
        """
        Build a Card from a Scryfall-style card object.

        Raises:
            ValueError: If the record has no id or no name, or a face or
                `image_uris` is not an object
        """
        card_id = data.get("id")
        name = data.get("name")
        if not card_id or not name:
            raise ValueError(f"Card record is missing id or name: {data!r:.80}")

        faces: list[CardFace] = []
        for index, face in enumerate(data.get("card_faces") or ()):
            if not isinstance(face, dict):
                raise ValueError(f"card_faces[{index}] is not an object")
            faces.append(
                CardFace(
                    name=face.get("name", ""),
                    colors=tuple(face.get("colors") or ()),
                    image_url=_normal_image(face),
                )
            )

        identity = data.get("color_identity")

        return cls(
            id=str(card_id),
            name=str(name),
            type_line=data.get("type_line") or "",
            cmc=float(data.get("cmc") or 0),
            rarity=data.get("rarity") or "common",
            declared_color_identity=frozenset(identity) if identity is not None else None,
            colors=tuple(data.get("colors") or ()),
            faces=tuple(faces),
            image_url=_normal_image(data),
            local_image_paths=tuple(data.get("localImagePaths") or ()),
        )


class ImageSource(str, Enum):
    """Where a card's display image comes from."""

    LOCAL = "local"
    REMOTE = "remote"
    FACE = "face"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True, slots=True)
class CardImage:
    """Resolved display image: a URL, or placeholder text when none exists."""

    source: ImageSource
    value: str

    @property
    def url(self) -> str | None:
        return None if self.source == ImageSource.PLACEHOLDER else self.value


def resolve_card_image(card: Card, set_code: str, image_base_url: str = "/sets") -> CardImage:
    """
    Pick the image shown for a card.

    Priority: cached local file, normal remote image, first face's remote
    image, then a "no image" placeholder.
    """
    if card.local_image_paths:
        base = image_base_url.rstrip("/")
        return CardImage(ImageSource.LOCAL, f"{base}/{set_code}/{card.local_image_paths[0]}")
    if card.image_url:
        return CardImage(ImageSource.REMOTE, card.image_url)
    if card.faces and card.faces[0].image_url:
        return CardImage(ImageSource.FACE, card.faces[0].image_url)
    return CardImage(ImageSource.PLACEHOLDER, f"{card.name} (No Image)")
