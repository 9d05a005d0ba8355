import time

import streamlit as st

from legislativas_live.charts import seat_bar_chart, styled_quotient_table
from legislativas_live.colors import PartyColors
from legislativas_live.data_adapters.territory_results import (
    fetch_all_territories,
    fetch_territory_results,
)
from legislativas_live.model.cells import classify_cells, next_contenders, seats_at_risk
from legislativas_live.model.national import build_region_tabs, compute_national, tab_label
from legislativas_live.model.regional import allocate_snapshot
from legislativas_live.regions import load_regions
from legislativas_live.settings import REFRESH_INTERVAL, TIE_BREAK, Y_AXIS_LENGTH


def format_turnout(region) -> str:
    turnout = region.turnout
    return "N/A" if turnout is None else f"{turnout * 100:.2f}%"


def format_quotient(cell) -> str:
    return f"**{cell.acronym}** (Votes / {cell.divisor}): {cell.quotient:,.2f}"


def voter_header(region):
    st.caption(
        f"Voters: {region.number_voters:,} | "
        f"Subscribed: {region.subscribed_voters:,} | "
        f"Turnout: {format_turnout(region)}"
    )


def render_national(national, colors):
    total = national.total
    st.subheader(f"Total (National Results) ({total.total_mandates} Mandates Nationally)")
    if national.tally:
        st.plotly_chart(seat_bar_chart(national.tally, colors), use_container_width=True)
    else:
        st.info("No allocation data to display.")
    st.caption(
        "Chart shows total physical mandates (API-attributed + simulated) obtained by each "
        f"party across all regions. This sums to {total.total_mandates} total mandates nationally."
    )
    st.dataframe(national.to_frame(), use_container_width=True, hide_index=True)


def render_region(snapshot, colors):
    allocation = allocate_snapshot(snapshot, Y_AXIS_LENGTH, TIE_BREAK)
    region = allocation.region
    quotients = allocation.quotients

    st.subheader(
        f"Vote Allocation Summary: {snapshot.display_name} "
        f"({region.attributed_mandates}/{region.total_mandates} allocated)"
    )
    if not snapshot.ok:
        st.warning(f"Results for {region.name} are unavailable right now ({snapshot.error}).")

    col1, col2 = st.columns([7, 5])
    with col1:
        seats = allocation.seat_totals()
        if seats:
            st.plotly_chart(seat_bar_chart(seats, colors), use_container_width=True)
        else:
            st.info("No allocation data to display.")
        st.caption(
            f"These {region.available_mandates} mandates are distributed based on D'Hondt. "
            f"The remaining {region.attributed_mandates} mandates for this region were pre-assigned."
        )

    with col2:
        st.markdown(
            f"**Next Highest Quotients (after all {region.total_mandates} physical mandates):**"
        )
        contenders = next_contenders(quotients, region.total_mandates)
        if contenders:
            st.markdown("\n".join(f"- {format_quotient(c)}" for c in contenders))
        elif region.available_mandates == 0:
            st.caption("No mandates were available for simulation.")
        else:
            st.caption("No further quotients to display.")

        st.markdown("**Two Parties at Risk:**")
        at_risk = seats_at_risk(quotients, region.available_mandates)
        if at_risk:
            lines = [f"- {format_quotient(c)}" for c in at_risk]
            if len(at_risk) == 1:
                lines[-1] += " _(Only one mandate allocated in simulation)_"
            st.markdown("\n".join(lines))
        elif region.available_mandates == 0:
            st.caption("No mandates were simulated.")
        else:
            st.caption("No mandates allocated in simulation.")

    if not allocation.parties:
        st.info("No party data available for the selected region or an error occurred.")
        return

    categories = classify_cells(quotients, region.attributed_mandates, region.available_mandates)
    st.dataframe(
        styled_quotient_table(allocation, categories, colors),
        use_container_width=True,
        height=38 * (allocation.max_divisor + 1),
    )
    with st.expander("Seats per party"):
        st.dataframe(allocation.to_frame(), use_container_width=True, hide_index=True)


def main():
    st.set_page_config(page_title="Legislativas 2025 - Vote Allocation", layout="wide")
    st.title("Legislativas 2025 - Vote Allocation")

    regions, total_key = load_regions()
    colors = PartyColors.from_yaml()

    with st.sidebar:
        auto_refresh = st.toggle("Auto-refresh", value=True)
        if st.button("Refresh now"):
            st.rerun()

    snapshots = fetch_all_territories(regions)
    tabs = build_region_tabs(snapshots, total_key)
    national = compute_national(snapshots, total_key, Y_AXIS_LENGTH, TIE_BREAK)

    keys = [r.territory_key for r in tabs]
    requested = st.query_params.get("territoryKey", total_key)
    active_key = st.radio(
        "Region",
        keys,
        index=keys.index(requested) if requested in keys else 0,
        format_func=lambda key: tab_label(tabs[keys.index(key)]),
        horizontal=True,
        label_visibility="collapsed",
    )
    st.query_params["territoryKey"] = active_key

    if national.failed_regions:
        st.warning("Data unavailable for: " + ", ".join(national.failed_regions))

    if active_key == total_key:
        voter_header(national.total)
        render_national(national, colors)
    else:
        name = next(r.name for r in regions if r.territory_key == active_key)
        # the tab list may be a few seconds old, show the freshest numbers for the open region
        snapshot = fetch_territory_results(active_key, name)
        voter_header(snapshot.region)
        render_region(snapshot, colors)

    if auto_refresh:
        st.caption(f"Refreshing every {REFRESH_INTERVAL}s")
        time.sleep(REFRESH_INTERVAL)
        st.rerun()


def main_cli():
    """Entry point for the 'legislativas-live' console script"""
    import os
    import subprocess
    import sys

    app_path = os.path.abspath(__file__)
    subprocess.run([sys.executable, "-m", "streamlit", "run", app_path])


if __name__ == "__main__":
    main()
