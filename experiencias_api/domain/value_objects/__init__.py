"""Value Objects del dominio de experiencias."""

from experiencias_api.domain.value_objects.date_range import DateRange

__all__ = ["DateRange"]
