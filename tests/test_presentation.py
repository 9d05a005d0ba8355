import plotly.graph_objects as go
import pytest

from legislativas_live.charts import seat_bar_chart, styled_quotient_table
from legislativas_live.colors import FALLBACK_COLOR, PartyColors
from legislativas_live.model.cells import CELL_STYLES, CellCategory, classify_cells
from legislativas_live.model.regional import allocate_region
from legislativas_live.model.results import PartyResult, Region
from legislativas_live.regions import load_regions


class TestLoadRegions:
    """Test the electoral circle configuration."""

    def test_bundled_config(self):
        regions, total_key = load_regions()

        assert total_key == "TOTAL"
        assert len(regions) == 20
        assert regions[0] == Region("Aveiro", "LOCAL-010000")
        assert regions[-1].name == "Açores"
        assert len({r.territory_key for r in regions}) == 20

    def test_duplicate_keys(self, tmp_path):
        path = tmp_path / "regions.yaml"
        path.write_text(
            "regions:\n"
            "  - {name: A, territory_key: LOCAL-1}\n"
            "  - {name: B, territory_key: LOCAL-1}\n",
            encoding="utf-8",
        )

        with pytest.raises(ValueError, match="Duplicate"):
            load_regions(str(path))

    def test_reserved_key(self, tmp_path):
        path = tmp_path / "regions.yaml"
        path.write_text("total_key: ALL\nregions:\n  - {name: A, territory_key: ALL}\n", encoding="utf-8")

        with pytest.raises(ValueError, match="reserved"):
            load_regions(str(path))

    def test_empty(self, tmp_path):
        path = tmp_path / "regions.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError):
            load_regions(str(path))


class TestPartyColors:
    def test_lookup_and_fallback(self):
        colors = PartyColors({"PS": "#f472b6"}, fallback="#000000")

        assert colors("PS") == "#f472b6"
        assert colors("NEW") == "#000000"
        assert colors.for_parties(["NEW", "PS"]) == ["#000000", "#f472b6"]

    def test_bundled_config(self):
        colors = PartyColors.from_yaml()

        assert colors("CH") == "#00008B"
        assert colors("unknown") == FALLBACK_COLOR


class TestCharts:
    def test_seat_bar_chart(self):
        colors = PartyColors({"AD": "#FFA500"})

        fig = seat_bar_chart({"PS": 3, "AD": 5, "L": 1}, colors)

        assert isinstance(fig, go.Figure)
        bar = fig.data[0]
        assert list(bar.y) == ["AD", "PS", "L"]
        assert list(bar.x) == [5, 3, 1]
        assert list(bar.marker.color) == ["#FFA500", FALLBACK_COLOR, FALLBACK_COLOR]

    def test_empty_chart(self):
        fig = seat_bar_chart({}, PartyColors())

        assert list(fig.data[0].x) == []

    def test_styled_quotient_table(self):
        region = Region("Beja", "LOCAL-020000", available_mandates=2, attributed_mandates=1)
        parties = [PartyResult("PS", 600, 1), PartyResult("CH", 400)]
        allocation = allocate_region(region, parties)
        categories = classify_cells(allocation.quotients, 1, 2)

        styler = styled_quotient_table(allocation, categories, PartyColors())
        html = styler.to_html()

        assert list(styler.data.columns) == ["PS", "CH"]
        assert len(styler.data) == 20
        assert "600.00" in html
        assert CELL_STYLES[CellCategory.FINALIZED].split(";")[0] in html

    def test_styled_table_repeated_acronym(self):
        """Cells are keyed by acronym, so only the first column of a repeated one is shown."""
        region = Region("Beja", "LOCAL-020000", available_mandates=2)
        parties = [PartyResult("PS", 600), PartyResult("PS", 300), PartyResult("CH", 400)]
        allocation = allocate_region(region, parties)
        categories = classify_cells(allocation.quotients, 0, 2)

        styler = styled_quotient_table(allocation, categories)

        assert list(styler.data.columns) == ["PS", "CH"]
        assert styler.data.loc[1, "PS"] == 600
        assert "600.00" in styler.to_html()
