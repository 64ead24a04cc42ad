import pytest

from dpr_core.datasets import load_cashflow, load_datasets, parse_nodes, parse_outline, parse_schemes
from dpr_core.errors import DatasetError
from dpr_core.models import NodeRole

def test_shipped_datasets_load():
    ds = load_datasets()
    assert len(ds.cashflow) == 24
    assert ds.cashflow[0].label == "M1"
    assert len(ds.outline) == 20
    assert ds.outline[0] == (19.1, 83.0)
    assert {n.role for n in ds.nodes} == set(NodeRole)
    assert all(s.focus for s in ds.schemes)
    assert ds.benchmarks[0].workforce_split.women == 0.41

def test_cashflow_rejects_duplicate_labels(tmp_path):
    csv = tmp_path / "cf.csv"
    csv.write_text("month,revenue,expense,capital\nM1,1,2,3\nM1,4,5,6\n", encoding="utf-8")
    with pytest.raises(DatasetError):
        load_cashflow(csv)

def test_cashflow_rejects_missing_values(tmp_path):
    csv = tmp_path / "cf.csv"
    csv.write_text("month,revenue,expense,capital\nM1,1,,3\n", encoding="utf-8")
    with pytest.raises(DatasetError):
        load_cashflow(csv)

def test_cashflow_missing_file(tmp_path):
    with pytest.raises(DatasetError):
        load_cashflow(tmp_path / "nope.csv")

def _scheme(**overrides):
    rec = {"name": "X", "ticket_size": [1, 10], "focus": ["Export"], "min_score": 0.5}
    rec.update(overrides)
    return rec

def test_scheme_invariants():
    (s,) = parse_schemes([_scheme(eligibility=[""])])
    assert s.focus == frozenset({"Export"})
    assert s.eligibility == ("",)   # display data, not validated
    with pytest.raises(DatasetError):
        parse_schemes([_scheme(ticket_size=[10, 1])])
    with pytest.raises(DatasetError):
        parse_schemes([_scheme(focus=[])])
    with pytest.raises(DatasetError):
        parse_schemes([_scheme(), _scheme()])
    with pytest.raises(DatasetError):
        parse_schemes([{"name": "no focus or score", "ticket_size": [1, 2]}])

def test_node_invariants():
    node = {"district": "Guntur", "latitude": 16.3, "longitude": 80.4, "role": "Input Cluster"}
    (n,) = parse_nodes([node])
    assert n.role is NodeRole.INPUT_CLUSTER
    with pytest.raises(DatasetError):
        parse_nodes([dict(node, role="Warehouse")])
    with pytest.raises(DatasetError):
        parse_nodes([node, node])

def test_outline_vertices_are_pairs():
    assert parse_outline([[1, 2]]) == ((1.0, 2.0),)
    with pytest.raises(DatasetError):
        parse_outline([[1, 2, 3]])
