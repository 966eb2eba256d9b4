import pytest

from tsnservice.gnmi import PathElem, ValueKind
from tsnservice.mstp_cist_table import set_default_mstp_cist_table, set_mstp_cist_table
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree


def _tree(component="1"):
    root = SchemaTree()
    mstp = root.add_child(SchemaTree(name="ieee8021-mstp", namespace=MSTP_NAMESPACE))
    table = mstp.add_child(SchemaTree(name="ieee8021MstpCistTable"))
    entry = table.add_child(SchemaTree(name="ieee8021MstpCistEntry"))
    entry.add_child(SchemaTree(name="ieee8021MstpCistComponentId", value=component))
    leaf = entry.add_child(SchemaTree(name="ieee8021MstpCistMaxHops", value="old"))
    return root, leaf


def test_sets_max_hops():
    root, leaf = _tree()
    trees, updates = set_mstp_cist_table(root, 10, 1, "10.0.0.3")
    assert trees[0] is leaf
    assert leaf.value == "10"
    assert updates[0].path.target == "10.0.0.3"
    assert updates[0].path.elem == [
        PathElem("ieee8021-mstp", {"namespace": MSTP_NAMESPACE}),
        PathElem("ieee8021MstpCistTable", {"ieee8021MstpCistComponentId": "1"}),
        PathElem("ieee8021MstpCistMaxHops", {}),
    ]
    assert updates[0].val.kind is ValueKind.INT
    assert updates[0].val.value == 10


def test_default_is_twenty():
    root, leaf = _tree()
    _, updates = set_default_mstp_cist_table(root, 1, "d")
    assert leaf.value == "20"
    assert updates[0].val.value == 20


def test_other_component_untouched():
    root, leaf = _tree(component="2")
    trees, _ = set_mstp_cist_table(root, 30, 1, "d")
    assert leaf.value == "old"
    assert trees[0].value == "30"


@pytest.mark.parametrize("hops", [5, 41])
def test_invalid_max_hops(hops):
    root, leaf = _tree()
    with pytest.raises(ValueError, match="Invalid MstpCistTableMaxHops"):
        set_mstp_cist_table(root, hops, 1, "d")
    assert leaf.value == "old"


@pytest.mark.parametrize("hops", [6, 40])
def test_boundaries_accepted(hops):
    _, updates = set_mstp_cist_table(SchemaTree(), hops, 0, "d")
    assert updates[0].val.value == hops