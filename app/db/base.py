"""SQLAlchemy Base class for all models."""
from app.models.base.base_model import Base


def import_models() -> None:
    """Import all models to register them with SQLAlchemy."""
    from app.models.attendance import AttendanceRecord  # noqa: F401
    from app.models.complaint import Complaint  # noqa: F401
    from app.models.counter import CodeCounter  # noqa: F401
    from app.models.fee import Fee  # noqa: F401
    from app.models.leave import LeaveApplication  # noqa: F401
    from app.models.room import Room  # noqa: F401
    from app.models.student import Student  # noqa: F401
    from app.models.warden import Warden  # noqa: F401


# Import models on module load
import_models()

__all__ = ["Base", "import_models"]
