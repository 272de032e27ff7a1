import gc

import pytest

from bindkit.metadata import (
    _CLASS_METADATA,
    MetadataKey,
    clear_class_metadata,
    define_class_metadata,
    get_class_metadata,
)

ROUTES = MetadataKey("routes")
OWNER = MetadataKey("owner")


class TestClassMetadata:
    """Tests for the class metadata store."""

    def test_define_and_get(self):
        """Test metadata defined on a class can be looked up."""
        class Target:
            pass

        define_class_metadata(ROUTES, Target, ["/users"])

        assert get_class_metadata(ROUTES, Target) == ["/users"]

    def test_keys_are_independent(self):
        """Test each key has its own store."""
        class Target:
            pass

        define_class_metadata(ROUTES, Target, ["/users"])

        assert get_class_metadata(OWNER, Target) is None

    def test_keys_compare_by_name(self):
        """Test equal names denote the same key."""
        class Target:
            pass

        define_class_metadata(MetadataKey("routes"), Target, "value")

        assert get_class_metadata(ROUTES, Target) == "value"

    def test_redefine_replaces(self):
        """Test defining twice keeps the last value."""
        class Target:
            pass

        define_class_metadata(ROUTES, Target, 1)
        define_class_metadata(ROUTES, Target, 2)

        assert get_class_metadata(ROUTES, Target) == 2

    def test_inherited(self):
        """Test subclasses inherit base class metadata."""
        class Base:
            pass

        class Derived(Base):
            pass

        define_class_metadata(ROUTES, Base, "base")

        assert get_class_metadata(ROUTES, Derived) == "base"
        assert get_class_metadata(ROUTES, Derived, own_only=True) is None

    def test_subclass_overrides(self):
        """Test the nearest class in the MRO wins."""
        class Base:
            pass

        class Derived(Base):
            pass

        define_class_metadata(ROUTES, Base, "base")
        define_class_metadata(ROUTES, Derived, "derived")

        assert get_class_metadata(ROUTES, Derived) == "derived"
        assert get_class_metadata(ROUTES, Base) == "base"

    def test_non_class_lookup(self):
        """Test values that are not classes have no metadata."""
        assert get_class_metadata(ROUTES, object()) is None
        assert get_class_metadata(ROUTES, "Target") is None

    def test_define_on_non_class(self):
        """Test metadata can only be defined on classes."""
        with pytest.raises(TypeError, match="only be defined on classes"):
            define_class_metadata(ROUTES, object(), "value")

    def test_clear_by_key(self):
        """Test clearing one key keeps the others."""
        class Target:
            pass

        define_class_metadata(ROUTES, Target, 1)
        define_class_metadata(OWNER, Target, 2)

        clear_class_metadata(ROUTES)

        assert get_class_metadata(ROUTES, Target) is None
        assert get_class_metadata(OWNER, Target) == 2

    def test_clear_all(self):
        """Test clearing everything."""
        class Target:
            pass

        define_class_metadata(ROUTES, Target, 1)

        clear_class_metadata()

        assert _CLASS_METADATA == {}

    def test_classes_held_weakly(self):
        """Test registered classes can be garbage collected."""
        def define():
            class Temporary:
                pass
            define_class_metadata(ROUTES, Temporary, 1)

        define()
        gc.collect()

        assert len(_CLASS_METADATA[ROUTES]) == 0
