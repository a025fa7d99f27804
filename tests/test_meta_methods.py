"""Meta-method resolution, snapshots, and operator dispatch."""

from __future__ import annotations

import gc

import pytest

from lightclass import (
    InvalidOperationError,
    MetaSlot,
    concat,
    create_class,
    extend_class,
    invoke_meta,
    is_instance,
    prototype_of,
    rawget,
    rawset,
)


@pytest.fixture
def vector(registry):
    Vector = create_class("Vector")

    def init(self, x, y):
        self.x = x
        self.y = y

    def add(a, b):
        return Vector(a.x + b.x, a.y + b.y)

    def sub(a, b):
        # Records operand order so reflected calls can be checked.
        return ("sub", a, b)

    Vector.__init__ = init
    Vector.__add__ = add
    Vector.__sub__ = sub
    Vector.__neg__ = lambda v: Vector(-v.x, -v.y)
    Vector.__eq__ = lambda a, b: (a.x, a.y) == (b.x, b.y)
    Vector.__str__ = lambda v: f"({v.x}, {v.y})"
    return Vector


def test_meta_slot_set_is_closed():
    assert len(MetaSlot) == 27
    assert [s.name for s in MetaSlot][:4] == ["MODE", "METATABLE", "TOSTRING", "GC"]
    assert MetaSlot.from_key("__add__") is MetaSlot.ADD
    assert MetaSlot.from_key("__iter__") is MetaSlot.PAIRS
    assert MetaSlot.from_key("speak") is None
    assert MetaSlot.from_key("__init__") is None


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

def test_subclass_instances_inherit_superclass_meta_methods(registry):
    A = create_class("A")
    A.__str__ = lambda self: "from A"
    B = extend_class("B", A)

    assert str(B()) == "from A"


def test_own_meta_method_overrides_the_inherited_one(registry):
    A = create_class("A")
    A.__str__ = lambda self: "from A"
    B = extend_class("B", A)
    B.__str__ = lambda self: "from B"

    assert str(B()) == "from B"
    assert str(A()) == "from A"


def test_inheritance_skips_generations(registry):
    A = create_class("A")
    A.__len__ = lambda self: 3
    B = extend_class("B", A)
    C = extend_class("C", B)

    assert len(C()) == 3


def test_instances_snapshot_meta_methods_at_construction(registry):
    A = create_class("A")
    B = extend_class("B", A)
    B.__str__ = lambda self: "old"
    b1 = B()

    B.__str__ = lambda self: "new"
    b2 = B()

    assert str(b1) == "old"
    assert str(b2) == "new"


def test_class_inheritance_is_resolved_when_the_subclass_is_created(registry):
    A = create_class("A")
    B = extend_class("B", A)
    A.__str__ = lambda self: "late"

    assert str(A()) == "late"
    assert str(B()).startswith("B: 0x")


def test_none_in_body_falls_back_to_inherited_meta_method(registry):
    A = create_class("A")
    A.__str__ = lambda self: "from A"
    B = extend_class("B", A)
    B.__str__ = None

    assert str(B()) == "from A"
    assert MetaSlot.TOSTRING in prototype_of(B()).meta_slots


def test_policy_slots_are_carried_but_not_dispatched(registry):
    Cache = create_class("Cache")
    Cache.__mode__ = "k"
    Cache.__metatable__ = "locked"

    cache = extend_class("LruCache", Cache)()
    proto = prototype_of(cache)

    assert proto.get_meta(MetaSlot.MODE) == "k"
    assert proto.get_meta(MetaSlot.METATABLE) == "locked"
    with pytest.raises(InvalidOperationError, match="not callable"):
        invoke_meta(cache, MetaSlot.MODE)


def test_default_display_without_tostring(registry):
    Plain = create_class("Plain")

    plain = Plain()

    assert str(plain) == f"Plain: {id(plain):#x}"
    assert repr(plain) == str(plain)
    assert f"{plain}" == str(plain)


# -----------------------------------------------------------------------------
# Operators
# -----------------------------------------------------------------------------

def test_arithmetic_and_unary_operators(vector):
    total = vector(1, 2) + vector(3, 4)
    flipped = -vector(1, -2)

    assert is_instance(total)
    assert (total.x, total.y) == (4, 6)
    assert str(flipped) == "(-1, 2)"


def test_binary_hooks_receive_operands_in_source_order(vector):
    v = vector(0, 0)

    assert vector(1, 1) - 5 == ("sub", vector(1, 1), 5)
    result = 10 - v
    assert result[0] == "sub"
    assert result[1] == 10
    assert result[2] is v


def test_binary_hook_of_the_right_operand_is_used(vector, registry):
    Other = create_class("Other")
    other = Other()
    v = vector(1, 1)

    op, left, right = other - v

    assert op == "sub"
    assert left is other
    assert right is v


def test_unsupported_operators_raise_type_error(vector):
    v = vector(1, 1)

    with pytest.raises(TypeError):
        v * 2
    with pytest.raises(TypeError):
        ~v
    with pytest.raises(TypeError):
        len(v)
    with pytest.raises(TypeError):
        iter(v)


def test_all_binary_operators_dispatch(registry):
    Recorder = create_class("Recorder")
    keys = [
        "__add__", "__sub__", "__mul__", "__truediv__", "__mod__", "__pow__",
        "__floordiv__", "__and__", "__or__", "__xor__", "__lshift__", "__rshift__",
    ]
    for key in keys:
        Recorder[key] = lambda a, b, key=key: key

    p = Recorder()

    assert [p + 1, p - 1, p * 1, p / 1, p % 1, p ** 1] == keys[:6]
    assert [p // 1, p & 1, p | 1, p ^ 1, p << 1, p >> 1] == keys[6:]
    assert 1 + p == "__add__"
    assert 1 >> p == "__rshift__"


def test_equality_uses_eq_hook(vector):
    a, b, c = vector(1, 2), vector(1, 2), vector(2, 1)

    assert a == b
    assert a != c
    assert a != (1, 2)
    assert len({a, b}) == 2


def test_equality_without_hook_is_identity(registry):
    Token = create_class("Token")
    t1, t2 = Token(), Token()

    assert t1 == t1
    assert t1 != t2


def test_ordering_uses_lt_and_le(registry):
    Version = create_class("Version")

    def init(self, n):
        self.n = n

    Version.__init__ = init
    Version.__lt__ = lambda a, b: a.n < b.n
    Version.__le__ = lambda a, b: a.n <= b.n

    v1, v2 = Version(1), Version(2)

    assert v1 < v2
    assert v2 > v1
    assert v1 <= Version(1)
    assert v2 >= v1
    assert not v2 < v1
    assert sorted([v2, v1]) == [v1, v2]


def test_swapped_ordering_prefers_the_right_operands_hook(registry):
    seen = []
    Left = create_class("Left")
    Right = create_class("Right")
    Left.__lt__ = lambda a, b: seen.append(("Left", a, b)) or True
    Left.__le__ = lambda a, b: seen.append(("Left", a, b)) or True
    Right.__lt__ = lambda a, b: seen.append(("Right", a, b)) or True
    Right.__le__ = lambda a, b: seen.append(("Right", a, b)) or True
    left, right = Left(), Right()

    assert left > right
    assert left >= right
    assert left < right

    assert seen == [
        ("Right", right, left),
        ("Right", right, left),
        ("Left", left, right),
    ]


def test_length_iteration_and_close(registry):
    Bag = create_class("Bag")
    closed = []

    def init(self, *items):
        self.items = list(items)

    Bag.__init__ = init
    Bag.__len__ = lambda self: len(self.items)
    Bag.__iter__ = lambda self: self.items
    Bag.__close__ = lambda self, err: closed.append(err)

    bag = Bag("a", "b")
    with bag as entered:
        assert entered is bag

    assert len(bag) == 2
    assert list(bag) == ["a", "b"]
    assert closed == [None]

    with pytest.raises(ValueError):
        with bag:
            raise ValueError("boom")
    assert isinstance(closed[-1], ValueError)


def test_with_requires_a_close_hook(registry):
    Plain = create_class("Plain")

    with pytest.raises(TypeError, match="no close meta-method"):
        with Plain():
            pass


def test_newindex_intercepts_new_fields_only(registry):
    Upper = create_class("Upper")
    seen = []

    def newindex(self, key, value):
        seen.append(key)
        rawset(self, key.upper(), value)

    Upper.__newindex__ = newindex
    obj = Upper()

    obj.color = "red"
    obj.COLOR = "blue"

    assert seen == ["color"]
    assert rawget(obj, "COLOR") == "blue"
    assert rawget(obj, "color") is None
    assert rawget(obj, "color", "missing") == "missing"


def test_finalizer_runs_on_collection(registry):
    Handle = create_class("Handle")
    released = []
    Handle.__del__ = lambda self: released.append(self.fd)

    def init(self, fd):
        self.fd = fd

    Handle.__init__ = init
    handle = Handle(7)
    del handle
    gc.collect()

    assert released == [7]


# -----------------------------------------------------------------------------
# Explicit dispatch
# -----------------------------------------------------------------------------

def test_invoke_meta_dispatches_any_slot(vector):
    v = vector(1, 1)

    assert str(invoke_meta(v, MetaSlot.ADD, vector(1, 2))) == "(2, 3)"
    made = invoke_meta(vector, MetaSlot.CALL, 5, 6)
    assert (made.x, made.y) == (5, 6)

    with pytest.raises(InvalidOperationError, match="no mul meta-method"):
        invoke_meta(v, MetaSlot.MUL, 2)
    with pytest.raises(InvalidOperationError, match="int has no add meta-method"):
        invoke_meta(42, MetaSlot.ADD, 1)


def test_concat(registry):
    Path = create_class("Path")

    def init(self, text):
        self.text = text

    Path.__init__ = init
    Path.__concat__ = lambda a, b: Path(f"{getattr(a, 'text', a)}/{getattr(b, 'text', b)}")

    assert concat(Path("usr"), "lib").text == "usr/lib"
    assert concat("root", Path("etc")).text == "root/etc"
    assert concat("a", 1) == "a1"
    assert concat(1.5, "x") == "1.5x"

    with pytest.raises(InvalidOperationError, match="concatenate a bool value"):
        concat("a", True)
    with pytest.raises(InvalidOperationError, match="concatenate a NoneType value"):
        concat(None, "x")
    with pytest.raises(InvalidOperationError, match="concatenate an instance value"):
        concat(create_class("Plain")(), "x")


def test_rawset_on_class_and_rejects_plain_values(animal):
    rawset(animal, "legs", 6)

    assert animal.legs == 6
    assert rawget(animal, "legs") == 6
    with pytest.raises(TypeError):
        rawget({"legs": 4}, "legs")
