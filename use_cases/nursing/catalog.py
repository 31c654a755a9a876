"""
Nursing Catalog - static reference data.

The nurses on staff and the consultations they offer. Nothing here is
ever created, updated or deleted at runtime; lookups return None when a
reference does not resolve and callers must handle that explicitly.
"""

from typing import List, Optional, Sequence

from core.data import ReadOnlyRepository

from .models import Nurse, Service


# =============================================================================
# REFERENCE DATA
# =============================================================================

NURSES: List[Nurse] = [
    Nurse(id="maria", name="Maria Silva"),
    Nurse(id="ana", name="Ana Santos"),
    Nurse(id="juliana", name="Juliana Lima"),
]

SERVICES: List[Service] = [
    Service(
        id="pre-natal",
        name="Consulta Pré-natal",
        description="Acompanhamento gestacional",
        duration_minutes=60,
    ),
    Service(
        id="pos-parto",
        name="Consulta Pós-parto",
        description="Acompanhamento pós-parto",
        duration_minutes=60,
    ),
    Service(
        id="amamentacao",
        name="Consultoria em Amamentação",
        description="Orientação para amamentação",
        duration_minutes=45,
    ),
    Service(
        id="planejamento-familiar",
        name="Planejamento Familiar",
        description="Orientação contraceptiva",
        duration_minutes=45,
    ),
    Service(
        id="saude-mulher",
        name="Saúde da Mulher",
        description="Consulta geral",
        duration_minutes=45,
    ),
]


class Catalog(ReadOnlyRepository[Service]):
    """
    Read-only lookup over nurses and services.

    The repository interface (get_by_id / get_all) serves services;
    nurse lookups have their own methods.
    """

    def __init__(
        self,
        nurses: Optional[Sequence[Nurse]] = None,
        services: Optional[Sequence[Service]] = None,
    ):
        self._nurses = tuple(NURSES if nurses is None else nurses)
        self._services = tuple(SERVICES if services is None else services)

    def list_nurses(self) -> List[Nurse]:
        return list(self._nurses)

    def list_services(self) -> List[Service]:
        return list(self._services)

    def get_all(self) -> List[Service]:
        return self.list_services()

    def get_by_id(self, id: str) -> Optional[Service]:
        return self.find_service_by_id(id)

    def find_service_by_id(self, service_id: Optional[str]) -> Optional[Service]:
        return next((s for s in self._services if s.id == service_id), None)

    def find_service_by_name(self, name: Optional[str]) -> Optional[Service]:
        if not name:
            return None
        return self.get_by_name(name.strip())

    def find_nurse_by_id(self, nurse_id: Optional[str]) -> Optional[Nurse]:
        return next((n for n in self._nurses if n.id == nurse_id), None)

    def find_nurse_by_name(self, name: Optional[str]) -> Optional[Nurse]:
        if not name:
            return None
        name = name.strip()
        return next((n for n in self._nurses if n.name == name), None)

    def default_nurse(self) -> Optional[Nurse]:
        """First nurse on staff, preselected when a service is picked."""
        return self._nurses[0] if self._nurses else None


# Shared default catalog; stateless, so safe to reuse
DEFAULT_CATALOG = Catalog()
