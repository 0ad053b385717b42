# wage_price_browser_streamlit.py
# Run:
#   python -m streamlit run wage_price_browser_streamlit.py
# or:
#   python -m streamlit run wage_price_browser_streamlit.py -- --csv data/wheat_wages.csv
#
# Browser view of the three wheat/wages charts, a year inspector that shows the
# same text as the desktop hover tooltip, and the record tables.

import argparse
from pathlib import Path

import streamlit as st
from matplotlib.figure import Figure

from wage_price_charts import CHARTS, render_all
from wage_price_data import (
    LOAD_FAILURE_MESSAGE,
    DataLoadFailure,
    DerivedRecord,
    derive_purchasing_power,
    load_records,
    records_to_frame,
)
from wage_price_hover import (
    Tooltip,
    format_purchasing_power_tooltip,
    format_record_tooltip,
    nearest_by_year,
)

CHART_TITLES = {
    "chart": "Wheat prices and weekly wages (after Playfair, 1821)",
    "chart2": "Wheat prices vs wages on separate axes",
    "chart3": "Purchasing power of a week's wages",
}


@st.cache_data(show_spinner=False)
def load_csv_any(path: str):
    return load_records(path)


@st.cache_data(show_spinner=False)
def load_csv_uploaded(uploaded_file):
    return load_records(uploaded_file)


def main():
    st.set_page_config(page_title="Wheat & Wages", layout="wide")
    st.title("Wheat Prices, Wages and Purchasing Power")
    st.caption("Playfair's wheat price and wage series, redrawn three ways.")

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--csv", default="")
    args, _ = parser.parse_known_args()

    # Sidebar: data source
    st.sidebar.header("Data source")

    csv_files = sorted([str(p) for p in Path(".").glob("*.csv")] + [str(p) for p in Path("data").glob("*.csv")])
    default_guess = args.csv if args.csv else (csv_files[0] if csv_files else "")

    source_mode = st.sidebar.radio("Load mode", ["Pick a CSV file", "Type a path", "Upload CSV"], index=0)

    records = None
    loaded_name = ""

    try:
        if source_mode == "Pick a CSV file":
            if not csv_files:
                st.sidebar.info("No CSV files found in the current folder.")
            picked = st.sidebar.selectbox(
                "Choose CSV",
                options=[""] + csv_files,
                index=(csv_files.index(default_guess) + 1 if default_guess in csv_files else 0),
            )
            if picked:
                records = load_csv_any(picked)
                loaded_name = picked

        elif source_mode == "Type a path":
            path_str = st.sidebar.text_input("CSV path", value=default_guess)
            if path_str.strip():
                records = load_csv_any(path_str.strip())
                loaded_name = path_str.strip()

        else:  # Upload
            up = st.sidebar.file_uploader("Upload CSV", type=["csv"])
            if up is not None:
                records = load_csv_uploaded(up)
                loaded_name = up.name
    except DataLoadFailure as err:
        st.error(LOAD_FAILURE_MESSAGE)
        st.caption(str(err))
        st.stop()

    if records is None:
        st.info("Select or upload a CSV to begin.")
        return

    pp = derive_purchasing_power(records)

    st.subheader("Loaded file")
    n_wages = sum(1 for r in records if r.wages is not None)
    st.write(f"**{loaded_name}**, years: **{len(records):,}**, with wages: **{n_wages:,}**")

    if not records:
        st.warning("No rows with both a year and a wheat price.")
        return

    # Charts (non-pyplot figures; the tooltip stays hidden in static images)
    tooltip = Tooltip()
    figures = [Figure(figsize=cls.layout.figsize) for cls in CHARTS]
    for r in render_all(records, tooltip, figures=figures):
        st.subheader(CHART_TITLES.get(r.target_id, r.target_id))
        st.pyplot(r.figure, width="stretch")

    # Year inspector
    st.subheader("Inspect one year")
    years = [r.year for r in records]
    year = st.select_slider("Year", options=years, value=years[0])
    rec = records[years.index(year)]

    col_a, col_b = st.columns([1, 1])
    with col_a:
        st.markdown("**Wheat & wages**")
        st.code(format_record_tooltip(rec))
    with col_b:
        st.markdown("**Purchasing power (nearest year with wages)**")
        nearest = nearest_by_year(pp, year)
        if nearest is None:
            st.info("No year has both wages and a wheat price.")
        else:
            st.code(format_purchasing_power_tooltip(nearest))

    # Tables
    st.subheader("Records")
    st.dataframe(records_to_frame(records), width="stretch", hide_index=True)

    st.subheader("Purchasing power")
    pp_df = records_to_frame(pp, kind=DerivedRecord)
    st.dataframe(pp_df, width="stretch", hide_index=True)

    st.download_button(
        "Download purchasing power CSV",
        data=pp_df.to_csv(index=False).encode("utf-8-sig"),
        file_name="purchasing_power.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
