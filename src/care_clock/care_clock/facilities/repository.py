from __future__ import annotations

from typing import Optional, Protocol

from .model import FacilitySettings


class FacilityRepository(Protocol):
    def get_current(self) -> Optional[FacilitySettings]:
        """First configured facility (single-facility deployments)."""

        raise NotImplementedError

    def get_by_id(self, facility_id: int) -> Optional[FacilitySettings]:
        raise NotImplementedError

    def update(
        self,
        *,
        facility_id: int,
        name: str,
        latitude: float,
        longitude: float,
        radius_meters: float,
    ) -> bool:
        raise NotImplementedError
