"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import streamlit as st

from geoh2.ui.components.formatting import format_cost, format_number


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Dict[str, str]]] = None,
    height: int = 400,
    show_index: bool = False,
    export_file_name: Optional[str] = None,
    rename: Optional[Dict[str, str]] = None,
) -> None:
    if df.empty:
        st.info("No data to display.")
        return

    formatted_df = df.copy()
    if column_config:
        for column, config in column_config.items():
            if column not in formatted_df.columns:
                continue
            fmt_type = config.get("type")
            decimals = int(config.get("decimals", 2 if fmt_type == "cost" else 0))
            if fmt_type == "cost":
                formatted_df[column] = formatted_df[column].apply(
                    lambda v: format_cost(v, decimals=decimals)
                )
            elif fmt_type == "number":
                formatted_df[column] = formatted_df[column].apply(
                    lambda v: format_number(v, decimals=decimals)
                )
    if rename:
        formatted_df = formatted_df.rename(columns=rename)

    st.dataframe(
        formatted_df,
        use_container_width=True,
        height=height,
        hide_index=not show_index,
    )

    if export_file_name:
        csv_bytes = df.to_csv(index=show_index).encode("utf-8")
        st.download_button(
            "Download CSV",
            data=csv_bytes,
            file_name=export_file_name,
            mime="text/csv",
        )
