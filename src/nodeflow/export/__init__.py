"""
src/nodeflow/export

Materialization of terminal artifacts: PDF rendering, data-URI descriptors,
delivery sinks and the speech side effect.
"""

from .files import (
    ArtifactSink,
    DirectoryArtifactSink,
    NullArtifactSink,
    data_uri,
    decode_data_uri,
    file_name,
    make_file,
)
from .report_pdf import render_text_pdf
from .speech import SilentSpeechSynthesizer, SpeechSynthesizer

__all__ = [
    "ArtifactSink",
    "DirectoryArtifactSink",
    "NullArtifactSink",
    "data_uri",
    "decode_data_uri",
    "file_name",
    "make_file",
    "render_text_pdf",
    "SilentSpeechSynthesizer",
    "SpeechSynthesizer",
]
