"""
Pipeline Exceptions

Terminal failures raised by the loader, decoder, encoder and writer.
Each error knows the diagnostic prefix printed before the process exits.
"""


class PipelineError(Exception):
    """Base class for every failure that aborts a pipeline run."""

    step = "pipeline"
    diagnostic = "Error running pipeline"

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"{self.diagnostic}: {cause}")


class InputReadError(PipelineError):
    step = "data_loading"
    diagnostic = "Error reading input file"


class DecodeError(PipelineError):
    step = "decoding"
    diagnostic = "Error parsing JSON"


class EncodeError(PipelineError):
    step = "encoding"
    diagnostic = "Error creating JSON output"


class OutputWriteError(PipelineError):
    step = "writing"
    diagnostic = "Error writing output file"
