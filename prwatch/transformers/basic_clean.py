# Opaque or display-verbatim values are passed through untouched
VERBATIM_KEYS = {"endCursor", "title"}


def clean_node(node):
    # Strip surrounding whitespace from strings in a raw GraphQL payload
    if isinstance(node, dict):
        return {k: v if k in VERBATIM_KEYS else clean_node(v) for k, v in node.items()}
    if isinstance(node, list):
        return [clean_node(v) for v in node if v is not None]
    if isinstance(node, str):
        return node.strip()
    return node
