import streamlit as st

st.set_page_config(page_title="Methodology • MSME DPR Assistant", layout="wide")
st.title("🧩 Methodology")
st.caption("How the charts and scores are computed")

st.markdown("""
## Architecture Overview
Static reference data (`config/datasets.yaml`, `data/cashflow.csv`) is loaded once and
passed to pure functions in `dpr_core`. Nothing is stored between requests.

1. **Geometry**
   - **Linear scales**: `range_min + (v - domain_min) / (domain_max - domain_min) * (range_max - range_min)`;
     a collapsed domain maps to the midpoint of the range.
   - **Paths**: first point moves, later points draw straight lines.
   - **Pie**: slices start at 12 o'clock and partition the full circle in input order.
   - **Map**: equirectangular; the state outline's bounding box fills the drawing, north up.

2. **Sensitivity heatmap**
   - Rows and columns follow the order drivers and variations first appear in the data.
   - Buckets: `>= 6` high positive, `>= 0` low positive, `<= -6` high negative, otherwise low negative.

3. **Scores** (knobs in `config/scoring.yaml`)
   - **Bankability (beta)**: `0.42` + `0.12` per keyword signal (loan, scheme, export, energy)
     + `min(length / 500, 0.18)`, capped at `0.95`.
   - **Scheme fit**: `min(1, overlap * 0.6 + (0.4 if readiness >= scheme minimum))`;
     schemes scoring above `0.15` are listed, best first.
""")

st.info("These are transparent heuristics, not model predictions. Verify scheme terms with the owning agency.")
