import pytest

from visualencer.core.Types import NodeRole
from visualencer.noderegistry.NodeRegistry import (
    ChildNodeType,
    NodeTypeRegistry,
    RootNodeType,
    UtilityNodeType,
)
from visualencer.nodes import default_registry, register_builtin_node_types


class MockRoot(RootNodeType):
    label = "Mock Root"
    category = "test"
    family = "mock"

    def create_config(self):
        return {"items": [1, 2], "name": "x"}

    def compile_root(self, node, block, ctx):
        block.push("seq.mock()")


class MockChild(ChildNodeType):
    label = "Mock Child"
    families = frozenset({"mock"})

    def compile_child(self, node, block, ctx):
        block.push("  .mocked()")


class MockUtility(UtilityNodeType):

    def compile(self, node, ctx):
        ctx.emit("mock();")


class TestNodeTypeRegistry:

    def setup_method(self):
        self.registry = NodeTypeRegistry()

    def teardown_method(self):
        self.registry = None

    def test_register_and_get(self):
        """Registered descriptors are returned by id; unknown ids give None."""
        root = MockRoot()
        self.registry.register("mockRoot", root)
        assert self.registry.get("mockRoot") is root
        assert "mockRoot" in self.registry
        assert self.registry.get("MockRoot") is None
        assert len(self.registry) == 1

    def test_last_registration_wins(self):
        first, second = MockChild(), MockChild()
        self.registry.register("c", first)
        self.registry.register("c", second)
        assert self.registry.get("c") is second
        assert self.registry.type_ids() == ["c"]

    def test_unregister(self):
        self.registry.register("u", MockUtility())
        self.registry.unregister("u")
        self.registry.unregister("never-registered")
        assert "u" not in self.registry

    def test_rejects_non_descriptor(self):
        with pytest.raises(TypeError):
            self.registry.register("x", object())

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError):
            self.registry.register("", MockUtility())

    def test_rejects_root_without_family(self):
        class NoFamily(MockRoot):
            family = ""

        with pytest.raises(ValueError, match="family"):
            self.registry.register("nf", NoFamily())

    def test_rejects_child_without_families(self):
        class NoFamilies(MockChild):
            families = frozenset()

        with pytest.raises(ValueError, match="family"):
            self.registry.register("nf", NoFamilies())

    def test_rejects_role_that_does_not_match_entry_point(self):
        """A root-shaped descriptor that claims the child role is refused."""
        class Confused(MockRoot):
            role = NodeRole.CHILD

        with pytest.raises(ValueError, match="role"):
            self.registry.register("confused", Confused())

    def test_default_config_is_an_independent_copy(self):
        self.registry.register("mockRoot", MockRoot())
        first = self.registry.create_default_config("mockRoot")
        first["items"].append(3)
        first["name"] = "changed"
        assert self.registry.create_default_config("mockRoot") == {"items": [1, 2], "name": "x"}

    def test_default_config_empty_for_unknown_or_missing(self):
        self.registry.register("u", MockUtility())
        assert self.registry.create_default_config("u") == {}
        assert self.registry.create_default_config("nope") == {}

    def test_describe(self):
        self.registry.register("mockRoot", MockRoot())
        info = self.registry.describe("mockRoot")
        assert info["type"] == "mockRoot"
        assert info["role"] == "root"
        assert info["family"] == "mock"
        assert info["defaultConfig"] == {"items": [1, 2], "name": "x"}
        assert self.registry.describe("nope") is None

    def test_registries_are_independent(self):
        other = NodeTypeRegistry()
        self.registry.register("u", MockUtility())
        assert "u" not in other


class TestBuiltinCatalog:

    @pytest.fixture
    def registry(self):
        return default_registry()

    def test_catalog_size(self, registry):
        assert len(registry) == 64

    def test_every_builtin_has_a_valid_role(self, registry):
        for type_id, descriptor in registry.items():
            assert isinstance(descriptor.role, NodeRole), type_id

    def test_child_families_are_plain_strings(self, registry):
        """Family membership is tested against the root's family string."""
        delay = registry.get("delay")
        assert delay.accepts("effect")
        assert not delay.accepts("crosshair")
        assert all(type(f) is str for f in delay.families)

    def test_builtin_roots(self, registry):
        roots = {tid: d.family for tid, d in registry.items() if d.role == NodeRole.ROOT}
        assert roots == {
            "effect": "effect",
            "sound": "sound",
            "animation": "animation",
            "scrollingText": "scrollingText",
            "canvasPan": "canvasPan",
            "crosshair": "crosshair",
        }

    def test_describe_builtin(self, registry):
        info = registry.describe("attachTo")
        assert info["role"] == "child"
        assert info["families"] == ["effect", "sound"]
        assert info["defaultConfig"]["mode"] == "selected-token"

    def test_duplicate_builtin_id_raises(self):
        with pytest.raises(ValueError):
            NodeTypeRegistry.builtin("effect")(MockRoot)

    def test_register_builtin_node_types_into_existing_registry(self):
        registry = NodeTypeRegistry()
        registry.register("mockRoot", MockRoot())
        register_builtin_node_types(registry)
        assert len(registry) == 65
        assert "mockRoot" in registry

    def test_builtins_can_be_refined(self, registry):
        """Extensions replace a built-in by registering under the same id."""
        class LoudSound(RootNodeType):
            family = "sound"

            def compile_root(self, node, block, ctx):
                block.push("seq.sound()")
                block.push("  .volume(1)")

        registry.register("sound", LoudSound())
        assert isinstance(registry.get("sound"), LoudSound)
