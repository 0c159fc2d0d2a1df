from pydantic import ValidationError
from prwatch.errors import FetchError
from prwatch.models import RepoPage
from prwatch.transformers.basic_clean import clean_node

def validate_page(data: dict) -> RepoPage:
    """Turn the `data` member of a GraphQL response into a RepoPage."""
    try:
        return RepoPage.model_validate(clean_node(data))   # may raise ValidationError
    except ValidationError as exc:
        raise FetchError(f"unexpected response shape: {exc}") from exc
