"""Research-data tables. Importing this package registers every model with ``Base.metadata``."""

from app.models.expression import AllowedExpression, ExpectedNormalization
from app.models.institution import Institution
from app.models.interview import Interview
from app.models.interviewee import Interviewee
from app.models.matrix import MatrixCategory, MatrixCode, MatrixSubcategory
from app.models.researcher import Researcher
from app.models.transcription import TranscriptionSegment

__all__ = [
    "AllowedExpression",
    "ExpectedNormalization",
    "Institution",
    "Interview",
    "Interviewee",
    "MatrixCategory",
    "MatrixCode",
    "MatrixSubcategory",
    "Researcher",
    "TranscriptionSegment",
]
