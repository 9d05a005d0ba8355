from typing import Dict, Mapping, Optional

import plotly.graph_objects as go
from pandas.io.formats.style import Styler

from legislativas_live.colors import PartyColors
from legislativas_live.model.cells import CELL_STYLES, CellCategory, CellKey
from legislativas_live.model.regional import RegionAllocation
from legislativas_live.model.seats import quotient_table


def seat_bar_chart(seats: Mapping[str, int], colors: PartyColors, height: Optional[int] = None) -> go.Figure:
    """Horizontal bars of seats per party, largest at the top."""
    ordered = sorted(seats.items(), key=lambda item: item[1], reverse=True)
    acronyms = [a for a, _ in ordered]
    values = [v for _, v in ordered]

    fig = go.Figure(
        data=[
            go.Bar(
                x=values,
                y=acronyms,
                orientation="h",
                marker=dict(color=colors.for_parties(acronyms)),
                text=values,
                textposition="outside",
                hovertemplate="%{y}: %{x}<extra></extra>",
            )
        ]
    )
    fig.update_layout(
        height=height or min(120 + 40 * max(len(acronyms), 1), 520),
        xaxis_title="Mandates",
        yaxis_title="",
        yaxis=dict(autorange="reversed"),
        showlegend=False,
        margin=dict(l=10, r=30, t=10, b=10),
    )
    return fig


def styled_quotient_table(
    allocation: RegionAllocation,
    categories: Dict[CellKey, CellCategory],
    colors: Optional[PartyColors] = None,
) -> Styler:
    table = quotient_table(allocation.parties, allocation.max_divisor)
    # cells are keyed by acronym, so a repeated acronym can only be shown once
    table = table.loc[:, ~table.columns.duplicated()]

    def cell_styles(df):
        styled = df.copy().astype(object)
        for acronym in df.columns:
            for divisor in df.index:
                category = categories.get((acronym, divisor))
                styled.loc[divisor, acronym] = CELL_STYLES[category] if category else "color: #6b7280"
        return styled

    styler = table.style.format("{:.2f}").apply(cell_styles, axis=None)
    if colors is not None:
        styler = styler.set_table_styles(
            {
                acronym: [{"selector": "th", "props": f"border-bottom: 4px solid {colors(acronym)}"}]
                for acronym in table.columns
            },
            overwrite=False,
        )
    return styler
