from __future__ import annotations

import pandas as pd
import plotly.express as px
import streamlit as st

from netsecdash.aggregation.aggregate import InvalidInput, aggregate
from netsecdash.aggregation.views import (
    counts_frame,
    hour_category_series,
    hour_frame,
    matrix_frame,
    top_sources,
)
from netsecdash.config import SETTINGS
from netsecdash.io.records import load_records
from netsecdash.utils.time import HOUR_KEY_FORMAT


st.set_page_config(page_title="Network Security Dashboard", layout="wide")


st.sidebar.title("Settings")
source = st.sidebar.text_input("Records (file path or URL)", value=SETTINGS.records)
fill_hours = st.sidebar.checkbox("Fill empty hours", value=SETTINGS.fill_hours)
max_sources = st.sidebar.slider("Max source IPs", 5, 100, min(max(SETTINGS.top_sources, 5), 100), step=5)

st.title("Network Security Dashboard")

try:
    records = load_records(source)
except Exception as e:
    st.error(f"Failed to load records from {source}: {e}")
    st.stop()

try:
    res = aggregate(records)
except InvalidInput as e:
    st.error(f"{source} is not a list of event records: {e}")
    st.stop()

if res.record_count == 0:
    st.info("Loading... no events in this batch yet.")
    st.stop()

st.caption(
    f"Events: {res.record_count} | Alerts: {res.alert_count} | "
    f"Unparseable timestamps: {res.malformed_timestamps}"
)

col1, col2 = st.columns(2)

with col1:
    st.subheader("Event Types")
    df_types = counts_frame(res.event_type_counts, "event_type")
    fig = px.pie(df_types, names="event_type", values="count")
    st.plotly_chart(fig, use_container_width=True)

with col2:
    st.subheader("Alert Categories")
    if res.alert_count:
        df_cats = counts_frame(res.alert_category_counts, "category")
        fig = px.pie(df_cats, names="category", values="count")
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.write("No alerts in this batch")

st.subheader("Events Over Time")
series = hour_category_series(res, fill_gaps=fill_hours)
if series.labels:
    df_time = pd.DataFrame(
        [(h, d.label, d.data[i]) for d in series.datasets for i, h in enumerate(series.labels)],
        columns=["bucket", "category", "count"],
    )
    df_time["hour"] = pd.to_datetime(df_time["bucket"], format=HOUR_KEY_FORMAT, errors="coerce")
    fig = px.area(
        df_time,
        x="hour",
        y="count",
        color="category",
        category_orders={"category": res.categories},
        labels={"hour": "Timestamp (Grouped by Hour)", "count": "Number of Events"},
    )
    st.plotly_chart(fig, use_container_width=True)
else:
    st.write("No alerts with a usable timestamp")

st.subheader("Alert Frequency Over Time")
df_freq = hour_frame(res, fill_gaps=fill_hours)
if len(df_freq):
    fig = px.line(
        df_freq,
        x="hour",
        y="count",
        markers=True,
        labels={"hour": "Timestamp (Grouped by Hour)", "count": "Number of Alerts"},
    )
    st.plotly_chart(fig, use_container_width=True)
else:
    st.write("No data")

st.subheader("Source IPs by Attack Types")
if res.source_category_matrix:
    keep = top_sources(res, max_sources)
    df_src = matrix_frame({s: res.source_category_matrix[s] for s in keep}, "src_ip")
    fig = px.bar(
        df_src,
        x="src_ip",
        y="count",
        color="category",
        barmode="stack",
        category_orders={"src_ip": keep, "category": res.categories},
        labels={"src_ip": "Source IPs", "count": "Number of Attacks"},
    )
    fig.update_layout(legend=dict(orientation="h", yanchor="top", y=-0.2))
    st.plotly_chart(fig, use_container_width=True)
    if len(res.source_category_matrix) > len(keep):
        st.caption(f"Showing top {len(keep)} of {len(res.source_category_matrix)} alerting sources.")
else:
    st.write("No data")
