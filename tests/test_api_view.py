"""Tests for view API endpoints."""

import pytest
from httpx import AsyncClient

from cardranker.models.view import FilterField
from cardranker.services.ranking import RankingSession


class TestGetView:
    async def test_default_view(self, client: AsyncClient) -> None:
        response = await client.get("/view")

        assert response.status_code == 200
        assert response.json() == {
            "filters": {
                "color_selector": "",
                "type_substring": "",
                "max_mana_value": None,
                "show_unranked_only": False,
            },
            "sort_key": "name",
            "cursor": 0,
            "mode": "single_card",
        }


class TestUpdateFilter:
    async def test_sets_color(self, client: AsyncClient) -> None:
        response = await client.put(
            "/view/filters", json={"field": "color_selector", "value": "multi"}
        )

        assert response.status_code == 200
        assert response.json()["filters"]["color_selector"] == "Multi"

    async def test_mana_value_from_text(self, client: AsyncClient) -> None:
        response = await client.put(
            "/view/filters", json={"field": "max_mana_value", "value": "3"}
        )

        assert response.json()["filters"]["max_mana_value"] == 3

    async def test_blank_mana_value_clears(self, client: AsyncClient) -> None:
        await client.put("/view/filters", json={"field": "max_mana_value", "value": 2})

        response = await client.put("/view/filters", json={"field": "max_mana_value", "value": ""})

        assert response.json()["filters"]["max_mana_value"] is None

    async def test_resets_cursor(self, client: AsyncClient) -> None:
        await client.post("/view/navigate", json={"direction": "next"})
        await client.post("/view/navigate", json={"direction": "next"})

        response = await client.put(
            "/view/filters", json={"field": "type_substring", "value": "Creature"}
        )

        assert response.json()["cursor"] == 0

    async def test_clears_unranked_only(self, client: AsyncClient) -> None:
        await client.post("/view/unranked/toggle")

        response = await client.put("/view/filters", json={"field": "color_selector", "value": "R"})

        filters = response.json()["filters"]
        assert filters["color_selector"] == "R"
        assert filters["show_unranked_only"] is False

    async def test_unknown_color(self, client: AsyncClient) -> None:
        response = await client.put(
            "/view/filters", json={"field": "color_selector", "value": "purple"}
        )

        assert response.status_code == 400
        assert response.json()["failure"]["kind"] == "invalid_input"

    @pytest.mark.parametrize("value", [True, 3])
    async def test_non_text_color(self, client: AsyncClient, value: object) -> None:
        response = await client.put(
            "/view/filters", json={"field": "color_selector", "value": value}
        )

        assert response.status_code == 400
        assert response.json()["failure"]["kind"] == "invalid_input"

    async def test_unknown_field(self, client: AsyncClient) -> None:
        response = await client.put("/view/filters", json={"field": "power", "value": 3})

        assert response.status_code == 422


class TestToggleUnranked:
    async def test_keeps_other_filters(self, client: AsyncClient, session: RankingSession) -> None:
        session.set_filter(FilterField.TYPE_SUBSTRING, "Creature")

        response = await client.post("/view/unranked/toggle")

        filters = response.json()["filters"]
        assert filters["show_unranked_only"] is True
        assert filters["type_substring"] == "Creature"

    async def test_toggles_back(self, client: AsyncClient) -> None:
        await client.post("/view/unranked/toggle")

        response = await client.post("/view/unranked/toggle")

        assert response.json()["filters"]["show_unranked_only"] is False


class TestSortAndMode:
    async def test_sort_resets_cursor(self, client: AsyncClient) -> None:
        await client.post("/view/navigate", json={"direction": "next"})

        response = await client.put("/view/sort", json={"sort_key": "rarity"})

        assert response.json()["sort_key"] == "rarity"
        assert response.json()["cursor"] == 0

    async def test_invalid_sort(self, client: AsyncClient) -> None:
        response = await client.put("/view/sort", json={"sort_key": "power"})

        assert response.status_code == 422

    async def test_mode_keeps_cursor(self, client: AsyncClient) -> None:
        await client.post("/view/navigate", json={"direction": "next"})

        response = await client.put("/view/mode", json={"mode": "gallery"})

        assert response.json()["mode"] == "gallery"
        assert response.json()["cursor"] == 1


class TestNavigation:
    async def test_wraps(self, client: AsyncClient) -> None:
        response = await client.post("/view/navigate", json={"direction": "previous"})

        assert response.json()["cursor"] == 5

    async def test_invalid_direction(self, client: AsyncClient) -> None:
        response = await client.post("/view/navigate", json={"direction": "sideways"})

        assert response.status_code == 422

    async def test_jump_to_card(self, client: AsyncClient) -> None:
        await client.put("/view/mode", json={"mode": "gallery"})

        response = await client.post("/view/jump/omega")

        assert response.json()["mode"] == "single_card"
        assert response.json()["cursor"] == 4

    async def test_jump_to_hidden_card_is_noop(self, client: AsyncClient) -> None:
        await client.put("/view/mode", json={"mode": "gallery"})
        await client.put("/view/filters", json={"field": "color_selector", "value": "R"})

        response = await client.post("/view/jump/omega")

        assert response.json()["mode"] == "gallery"
        assert response.json()["cursor"] == 0
