"""Request normalization, row assembly and persistence for JSON exports."""

from sqlitejson.export.assembler import assemble, fold_rows, js_string
from sqlitejson.export.exporter import Exporter, open_exporter
from sqlitejson.export.models import CanonicalQuery, ExportRequest, coerce_request
from sqlitejson.export.normalizer import normalize
from sqlitejson.export.writer import export_to_file

__all__ = [
    "CanonicalQuery",
    "ExportRequest",
    "Exporter",
    "assemble",
    "coerce_request",
    "export_to_file",
    "fold_rows",
    "js_string",
    "normalize",
    "open_exporter",
]
