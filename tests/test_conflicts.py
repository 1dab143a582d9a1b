"""Tests for generated-name conflict detection."""

import pytest
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from enumbind import MethodConflictError, SQLAlchemyHost, bind_enum, declarations
from enumbind.core.conflicts import ConflictGuard, check_conflict
from enumbind.core.host import ENUM_MEMBERS_ATTR


def make_model(base, name: str, **namespace):
    """Define a mapped model with an id and a status column."""
    attrs = {
        "__tablename__": name.lower(),
        "id": mapped_column(Integer, primary_key=True),
        "status": mapped_column(String(20), nullable=True),
        "__annotations__": {"id": Mapped[int], "status": Mapped[str]},
    }
    attrs.update(namespace)
    return type(name, (base,), attrs)


def make_animal(base):
    """STI parent keyed on kind."""
    return type(
        "Animal",
        (base,),
        {
            "__tablename__": "animals",
            "__annotations__": {"id": Mapped[int], "kind": Mapped[str]},
            "id": mapped_column(Integer, primary_key=True),
            "kind": mapped_column(String(20)),
            "__mapper_args__": {"polymorphic_on": "kind"},
        },
    )


class TestMethodConflicts:
    """Test collisions with members the model already has."""

    def test_conflict_with_instance_method(self, base):
        """Test a hand-written predicate blocks the generated one."""

        def is_active(self):
            return True

        Model = make_model(base, "Member", is_active=is_active)

        with pytest.raises(MethodConflictError) as exc_info:
            bind_enum(Model, "status", ["active"], single_table_inheritance=True)

        assert exc_info.value.column == "status"
        assert exc_info.value.method_name == "is_active"
        assert exc_info.value.details["source"] == "Member"

    def test_conflict_with_mapped_column(self, base):
        """Test an is_active column blocks is_active()."""
        Model = make_model(
            base,
            "Customer",
            is_active=mapped_column(Boolean, default=True),
        )

        with pytest.raises(MethodConflictError, match="is_active"):
            bind_enum(Model, "status", ["active", "disabled"])

    def test_conflict_with_inherited_method(self, base):
        """Test members inherited from a mixin count."""

        class ArchiveMixin:
            def archived(self):
                return False

        Model = type(
            "Document",
            (ArchiveMixin, base),
            {
                "__tablename__": "documents",
                "__annotations__": {"id": Mapped[int], "status": Mapped[str]},
                "id": mapped_column(Integer, primary_key=True),
                "status": mapped_column(String(20)),
            },
        )

        with pytest.raises(MethodConflictError) as exc_info:
            bind_enum(Model, "status", ["draft", "archived"], polymorphic=True)

        assert exc_info.value.method_name == "archived"
        assert exc_info.value.details["source"] == "ArchiveMixin"

    def test_conflict_with_declarative_attribute(self, base):
        """Test a scope cannot shadow the declarative metadata."""
        Model = make_model(base, "Setting")

        with pytest.raises(MethodConflictError, match="metadata"):
            bind_enum(Model, "status", ["metadata"], polymorphic=True)

    def test_conflict_with_metaclass_attribute(self, base):
        """Test class-level names are checked against the metaclass."""
        Model = make_model(base, "Node")

        with pytest.raises(MethodConflictError) as exc_info:
            bind_enum(Model, "status", ["mro"], polymorphic=True)

        assert "metaclass" in exc_info.value.details["source"]

    def test_conflict_with_constant(self, base):
        """Test an existing class constant blocks the generated one."""
        Model = make_model(base, "Plan", ACTIVE="yes")

        with pytest.raises(MethodConflictError, match="ACTIVE"):
            bind_enum(Model, "status", ["active"], polymorphic=True)

    def test_constants_disabled_skips_constant_names(self, base):
        """Test constants=False generates no constant names to collide."""
        Model = make_model(base, "Tier", ACTIVE="yes")

        bind_enum(Model, "status", ["active"], polymorphic=True, constants=False)

        assert Model.ACTIVE == "yes"

    def test_conflict_between_values_of_one_enum(self, base):
        """Test two values of the same declaration cannot share a name."""
        Model = make_model(base, "Switch")

        # x -> is_x(); is_x -> scope is_x()
        with pytest.raises(MethodConflictError, match="another value"):
            bind_enum(Model, "status", ["x", "is_x"], single_table_inheritance=True)

    def test_conflict_with_enum_on_other_column(self, base):
        """Test two enums on different columns cannot share names."""
        Model = make_model(
            base,
            "Job",
            state=mapped_column(String(20), nullable=True),
            __annotations__={"id": Mapped[int], "status": Mapped[str], "state": Mapped[str]},
        )
        bind_enum(Model, "status", ["active"], polymorphic=True)

        with pytest.raises(MethodConflictError) as exc_info:
            bind_enum(Model, "state", ["active"], polymorphic=True)

        assert "enum on 'status'" in exc_info.value.details["source"]


class TestConflictAtomicity:
    """Test a failed declaration attaches nothing."""

    def test_nothing_attached_on_conflict(self, base):
        """Test earlier values are not left behind when a later one conflicts."""

        def archived(cls):
            return None

        Model = make_model(base, "Post", archived=classmethod(archived))

        with pytest.raises(MethodConflictError):
            bind_enum(Model, "status", ["active", "pending", "archived"], single_table_inheritance=True)

        assert not hasattr(Model, "is_active")
        assert not hasattr(Model, "mark_pending")
        assert not hasattr(Model, "active")
        assert not hasattr(Model, "ACTIVE")
        assert not hasattr(Model, "status_names")
        assert "status" not in declarations(Model)


class TestRedeclaration:
    """Test names from an earlier binding on the same column."""

    def test_sti_subclass_may_redeclare(self, base):
        """Test a subclass redeclaring the inherited enum is allowed."""
        Parent = make_animal(base)
        bind_enum(Parent, "kind", ["Dog", "Cat"], single_table_inheritance=True)

        Child = type("Dog", (Parent,), {"__mapper_args__": {"polymorphic_identity": "Dog"}})
        declaration = bind_enum(Child, "kind", ["Dog", "Cat"], single_table_inheritance=True)

        assert "is_dog" in declaration.binding_names()
        assert "is_dog" in vars(Child)
        assert vars(Child)[ENUM_MEMBERS_ATTR]["is_dog"] == "kind"
        assert "kind_names" not in vars(Child)[ENUM_MEMBERS_ATTR]

    def test_hand_written_subclass_method_conflicts(self, base):
        """Test a subclass method is not mistaken for an inherited enum binding."""
        Parent = make_animal(base)
        bind_enum(Parent, "kind", ["Dog", "Cat"], single_table_inheritance=True)

        def is_dog(self):
            return True

        Child = type(
            "Dog",
            (Parent,),
            {"__mapper_args__": {"polymorphic_identity": "Dog"}, "is_dog": is_dog},
        )

        with pytest.raises(MethodConflictError) as exc_info:
            bind_enum(Child, "kind", ["Dog", "Cat"], single_table_inheritance=True)

        assert exc_info.value.method_name == "is_dog"
        assert exc_info.value.details["source"] == "Dog"
        assert Child.is_dog is is_dog


class TestCheckConflict:
    """Test the guard primitives directly."""

    def test_free_name_passes(self, base):
        """Test an unused name is accepted."""
        host = SQLAlchemyHost(make_model(base, "Free"))

        assert check_conflict(host, "status", "is_free", class_level=False) is None

    def test_instance_level_mapped_attribute(self, base):
        """Test a mapped attribute name is taken."""
        host = SQLAlchemyHost(make_model(base, "Taken"))

        with pytest.raises(MethodConflictError):
            check_conflict(host, "status", "status", class_level=False)

    def test_guard_tracks_planned_names(self, base):
        """Test the guard remembers what it has approved."""
        guard = ConflictGuard(SQLAlchemyHost(make_model(base, "Planned")), "status")

        assert guard.check("is_on") == "is_on"
        assert guard.planned == frozenset({"is_on"})
        with pytest.raises(MethodConflictError):
            guard.check("is_on", class_level=True)
