from tsnservice import composite
from tsnservice.gnmi import PathElem
from tsnservice.schema_tree import SchemaTree

IFACE_NS = "urn:ietf:params:xml:ns:yang:ietf-interfaces"
BRIDGE_NS = "urn:ieee:std:802.1Q:yang:ieee802-dot1q-bridge"


def _interfaces_tree():
    root = SchemaTree()
    interfaces = root.add_child(SchemaTree(name="interfaces", namespace=IFACE_NS))
    nodes = {}
    for port in ("p1", "p2"):
        iface = interfaces.add_child(SchemaTree(name="interface"))
        iface.add_child(SchemaTree(name="name", value=port))
        nodes[port] = iface.add_child(SchemaTree(name="bridge-port", namespace=BRIDGE_NS))
    return root, nodes


def test_param_0_keys_finds_child_and_starts_path():
    root = SchemaTree()
    child = root.add_child(SchemaTree(name="leaf", value="v"))
    tree, path = composite.param_0_keys(root, None, "leaf")
    assert tree is child
    assert path == [PathElem("leaf", {})]


def test_param_0_keys_missing_child_gives_empty_tree():
    tree, path = composite.param_0_keys(SchemaTree(), [PathElem("a", {})], "missing")
    assert tree == SchemaTree()
    assert [e.name for e in path] == ["a", "missing"]


def test_param_namespace_requires_matching_namespace():
    root = SchemaTree()
    root.add_child(SchemaTree(name="interfaces", namespace="other"))
    tree, path = composite.param_namespace(root, None, "interfaces", IFACE_NS)
    assert tree.name == ""
    assert path == [PathElem("interfaces", {"namespace": IFACE_NS})]


def test_param_1_key_with_table_uses_table_name_in_path():
    root = SchemaTree()
    table = root.add_child(SchemaTree(name="T"))
    entry = table.add_child(SchemaTree(name="E"))
    entry.add_child(SchemaTree(name="k", value="7"))
    tree, path = composite.param_1_key(root, None, "T", "E", "k", "7")
    assert tree is entry
    assert path == [PathElem("T", {"k": "7"})]


def test_param_1_key_without_table_uses_entry_name():
    root, nodes = _interfaces_tree()
    interfaces = root.children[0]
    tree, path = composite.param_1_key(interfaces, None, "", "interface", "name", "p2")
    assert tree is nodes["p2"].parent
    assert path == [PathElem("interface", {"name": "p2"})]


def test_param_2_and_3_keys_select_matching_entry():
    root = SchemaTree()
    table = root.add_child(SchemaTree(name="T"))
    for a, b, c in (("1", "1", "1"), ("1", "2", "3")):
        entry = table.add_child(SchemaTree(name="E"))
        entry.add_child(SchemaTree(name="a", value=a))
        entry.add_child(SchemaTree(name="b", value=b))
        entry.add_child(SchemaTree(name="c", value=c))
    second = table.children[1]
    tree2, path2 = composite.param_2_keys(root, None, "T", "E", "a", "1", "b", "2")
    tree3, path3 = composite.param_3_keys(root, None, "T", "E", "a", "1", "b", "2", "c", "3")
    assert tree2 is second
    assert tree3 is second
    assert path2[0].key == {"a": "1", "b": "2"}
    assert path3[0].key == {"a": "1", "b": "2", "c": "3"}


def test_path_to_bridge_walks_tree_and_path():
    root, nodes = _interfaces_tree()
    tree, path = composite.path_to_bridge(root, "p1")
    assert tree is nodes["p1"]
    assert path == [
        PathElem("interfaces", {"namespace": IFACE_NS}),
        PathElem("interface", {"name": "p1"}),
        PathElem("bridge-port", {"namespace": BRIDGE_NS}),
    ]


def test_path_does_not_modify_prefix():
    prefix = [PathElem("x", {})]
    _, path = composite.param_0_keys(SchemaTree(), prefix, "y")
    assert len(prefix) == 1
    assert len(path) == 2