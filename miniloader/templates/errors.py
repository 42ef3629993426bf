"""Fatal template resolution errors.

Each of these aborts the build: they point at an authoring mistake in the
loader catalogue or at a dependency the external stage never provided.
"""


class TemplateError(Exception):
    """Base class for template resolution failures."""


class MissingBaseFragmentError(TemplateError):
    """A fragment map has no ``base`` entry and no active mode matched."""

    def __init__(self, keys: list[str]):
        self.keys = keys
        super().__init__(
            f"base data does not exist (available fragments: {', '.join(keys) or 'none'})"
        )


class AmbiguousFragmentError(TemplateError):
    """More than one active mode supplies a fragment for the same map."""

    def __init__(self, matches: list[str]):
        self.matches = matches
        super().__init__(
            f"ambiguous fragment selection, several active modes match: {', '.join(matches)}"
        )


class MissingExternalRecordError(TemplateError, KeyError):
    """A lookup into an external record table found nothing."""

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"no '{category}' record named '{name}'")

    def __str__(self) -> str:
        return self.args[0]
