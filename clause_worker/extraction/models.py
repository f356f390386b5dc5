from dataclasses import dataclass

NO_INDEMNIFICATION_CLAUSE = "No indemnification clause found."
NO_TERMINATION_CLAUSE = "No termination for convenience clause found."


@dataclass(frozen=True)
class ClauseExtractionResult:
    """The two extracted clauses; a sentinel stands in for a clause that was not found."""

    indemnification_text: str = NO_INDEMNIFICATION_CLAUSE
    termination_text: str = NO_TERMINATION_CLAUSE
