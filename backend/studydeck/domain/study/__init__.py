from .session import SessionStateError, StudyCard, StudySession

__all__ = ["SessionStateError", "StudyCard", "StudySession"]
