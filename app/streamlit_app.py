import logging
import os

import streamlit as st

from dpr_core.dashboard import (
    allocation_chart,
    cashflow_chart,
    geo_map,
    scheme_matches,
    score_turn,
    sensitivity_heatmap,
    viability_profile,
)
from dpr_core.datasets import load_datasets
from dpr_core.formatting import fmt_pct, fmt_rate, fmt_ticket
from dpr_core.geo import select_node
from dpr_core.models import FreeTextInput, Language
from dpr_core.scoring import focus_areas, load_scoring_config
from dpr_core.sensitivity import build_grid

logging.basicConfig(
    level=os.getenv("DPR_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="MSME DPR Assistant", layout="wide")
st.title("MSME DPR Assistant")

@st.cache_resource
def get_datasets():
    return load_datasets()

@st.cache_resource
def get_scoring():
    return load_scoring_config()

data = get_datasets()
scoring = get_scoring()

ROLE_COLOR = {
    "Input Cluster": "#14b8a6",
    "Processing Hub": "#2563eb",
    "Distribution": "#f59e0b",
}
SERIES_COLOR = {"revenue": "#2563eb", "expense": "#f59e0b", "capital": "#14b8a6"}
BUCKET_COLOR = {
    "high-positive": "#2563eb",
    "low-positive": "#99f6e4",
    "high-negative": "#f43f5e",
    "low-negative": "#fbbf24",
}

def svg(width, height, body):
    st.markdown(
        f'<svg viewBox="0 0 {width} {height}" width="100%" role="img">{body}</svg>',
        unsafe_allow_html=True,
    )


tabs = st.tabs(["Conversation", "Financial Engine", "Scheme Matcher", "Geo Reach"])

with tabs[0]:
    st.subheader("Conversational Onboarding")
    if "turns" not in st.session_state:
        st.session_state.turns = []
    language = st.radio("Language", [l.value for l in Language], horizontal=True)
    text = st.text_area("Type or paste a transcript of your business context")
    if st.button("Generate DPR Section"):
        turn = score_turn(FreeTextInput(text, Language(language)), scoring.bankability)
        if turn:
            st.session_state.turns.append(turn)
    for turn in st.session_state.turns:
        st.write(f"**You:** {turn.text}")
        st.metric("Bankability score (beta)", fmt_pct(turn.bankability))
        if turn.indicators:
            st.caption("Signals: " + ", ".join(turn.indicators))

with tabs[1]:
    st.subheader("Intelligent Financial Engine")
    names = [b.sub_sector for b in data.benchmarks]
    idx = names.index(st.selectbox("Sub-sector", names))
    selected = data.benchmarks[idx]

    profile = viability_profile(selected)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Operating Margin", profile["operating_margin"])
    c2.metric("Break-even", f"{profile['break_even_months']} months")
    c3.metric("Productivity Index", profile["productivity_index"])
    c4.metric("Export Readiness", profile["export_readiness"])
    st.json(profile["workforce"])

    st.write("**Cash Flow Radar**")
    chart = cashflow_chart(data.cashflow)
    body = "".join(
        f'<path d="{d}" fill="none" stroke="{SERIES_COLOR[s]}" stroke-width="2"/>'
        for s, d in chart.paths.items()
    )
    body += "".join(
        f'<text x="{x}" y="{chart.height - 20}" font-size="10" text-anchor="middle">{label}</text>'
        for label, x in chart.ticks
    )
    svg(chart.width, chart.height, body)

    col_a, col_b = st.columns(2)
    with col_a:
        st.write("**Capital Allocation Blueprint**")
        wedges = allocation_chart(selected, policy=scoring.allocation)
        colors = ["#2563eb", "#14b8a6", "#f59e0b"]
        svg(160, 160, "".join(f'<path d="{w.path}" fill="{colors[i % 3]}"/>' for i, w in enumerate(wedges)))
        for w in wedges:
            st.write(f"- {w.label}: {w.percent}")
        for source in profile["sources"]:
            st.caption(source)
    with col_b:
        st.write("**EBITDA Sensitivity** (delta % vs base case)")
        variations, rows = sensitivity_heatmap(data.sensitivity)
        header = "".join(f"<th>{v}</th>" for v in variations)
        body = "".join(
            f"<tr><td>{r.driver}</td>"
            + "".join(
                f'<td style="background:{BUCKET_COLOR.get(c.bucket, "#f1f5f9")};text-align:center">{c.label}</td>'
                for c in r.cells
            )
            + "</tr>"
            for r in rows
        )
        st.markdown(f"<table><tr><th>Driver</th>{header}</tr>{body}</table>", unsafe_allow_html=True)

    with st.expander("Sensitivity table"):
        st.dataframe(build_grid(data.sensitivity).to_frame(), use_container_width=True)

with tabs[2]:
    st.subheader("Real-time Scheme Matcher")
    score = st.slider("Current readiness", 0.4, 0.95, 0.62, 0.01)
    selected_focus = st.multiselect("Focus filters", focus_areas(data.schemes), default=["Working Capital"])
    for m in scheme_matches(data.schemes, selected_focus, score, scoring.eligibility):
        s = m.scheme
        with st.container(border=True):
            st.write(f"### {s.name}")
            st.caption(f"{s.owner} - Ticket {fmt_ticket(s.ticket_size)}")
            st.metric("Fit score", fmt_pct(m.score))
            st.write(f"Rate: {fmt_rate(s.interest_rate)} | Subsidy: {fmt_pct(s.subsidy)} | Min score: {fmt_pct(s.min_score)}")
            st.write("Focus: " + ", ".join(sorted(s.focus)))
            st.write("Digital touchpoints: " + ", ".join(s.digital_touchpoints))
            st.caption("Eligibility highlights: " + "; ".join(s.eligibility))

with tabs[3]:
    st.subheader("Geospatial Market Intelligence")
    gm = geo_map(data.outline, data.nodes)
    body = f'<path d="{gm.outline_path}" fill="rgba(37,99,235,0.08)" stroke="rgba(37,99,235,0.35)" stroke-width="2"/>'
    body += "".join(
        f'<circle cx="{n.x}" cy="{n.y}" r="9" fill="{ROLE_COLOR[n.role]}"/>'
        f'<text x="{n.x + 12}" y="{n.y - 10}" font-size="10">{n.district}</text>'
        for n in gm.nodes
    )
    svg(gm.width, gm.height, body)
    district = st.selectbox("Node intelligence", ["(none)"] + [n.district for n in data.nodes])
    node = select_node(data.nodes, district)
    if node:
        st.write(f"**{node.district}** - {node.role.value}, throughput index {node.throughput:g}")
    else:
        st.caption("Pick a district to view its role and throughput.")

st.divider()
st.caption("Scores are heuristics for demonstration only; they are not a lending decision.")
