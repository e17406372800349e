GENERIC_FAILURE = "Failed to analyze the poem. Please try again with a clearer image."
PRINT_FALLBACK = (
    "Failed to generate PDF. You can also try printing the page (Ctrl+P) "
    "and selecting \"Save as PDF\"."
)


class AnalysisError(Exception):
    """Base for every failure of a single analysis call."""

    kind = "analysis"

    @property
    def user_message(self) -> str:
        return GENERIC_FAILURE


class TransportError(AnalysisError):
    """The request to the analysis service could not be completed."""

    kind = "transport"

    @property
    def user_message(self) -> str:
        return str(self) or GENERIC_FAILURE


class EmptyResponseError(AnalysisError):
    kind = "empty"


class SchemaError(AnalysisError):
    kind = "schema"


class ExportError(Exception):
    """Capture or PDF assembly failed. Never leaves the exporter."""
