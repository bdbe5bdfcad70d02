"""All SQLAlchemy models - import here so Base.metadata sees them."""

from bhrf.models.facility import Credential, Employee, EmployeeDocument, Facility, FacilityDocument
from bhrf.models.admin_task import EvacuationDrillReport, FireDrillReport, OversightTrainingReport

__all__ = [
    "Facility",
    "Employee",
    "EmployeeDocument",
    "FacilityDocument",
    "Credential",
    "FireDrillReport",
    "EvacuationDrillReport",
    "OversightTrainingReport",
]
