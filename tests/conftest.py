import pytest

from lightclass import ClassRegistry, push_registry
from lightclass.conf import RegistryConfig


@pytest.fixture
def registry():
    """Fresh registry made active for the duration of the test."""
    with push_registry(ClassRegistry(RegistryConfig(), label="test")) as reg:
        yield reg


@pytest.fixture
def animal(registry):
    """`Animal` with an initializer, a method, a field default and a display hook."""
    from lightclass import create_class

    Animal = create_class("Animal")

    def init(self, name, sound="..."):
        self.name = name
        self.sound = sound

    Animal.__init__ = init
    Animal.legs = 4
    Animal.speak = lambda self: f"{self.name} says {self.sound}"
    Animal.__str__ = lambda self: f"Animal({self.name})"
    return Animal
