"""decimath.infra: constant store protocol and in-memory adapter."""

from decimath.infra.memory_adapter import InMemoryConstantStore as InMemoryConstantStore
from decimath.infra.protocols import ConstantId as ConstantId
from decimath.infra.protocols import ConstantKey as ConstantKey
from decimath.infra.protocols import ConstantStore as ConstantStore
