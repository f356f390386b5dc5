from pathlib import Path

from clause_worker.extraction.exceptions import ClauseExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the clause extraction prompt template.

    Args:
        path: Path to the template file.
              Defaults to the bundled clause_prompt.txt.

    Returns:
        The raw template with {contract_text}, {no_indemnification} and
        {no_termination} placeholders.

    Raises:
        ClauseExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "clause_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ClauseExtractionError(f"Failed to load prompt template: {exc}") from exc
