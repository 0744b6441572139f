from .builder import BuildResult, build_datasets, run_build, write_build
from .csv_parser import PassportMatrix, parse_matrix, read_matrix, sniff_delimiter
from .errors import CsvFormatError, DatasetBuildError, SourceNotFoundError
from .storage import DatasetStore, write_json_atomic

__all__ = [
    "BuildResult",
    "build_datasets",
    "run_build",
    "write_build",
    "PassportMatrix",
    "parse_matrix",
    "read_matrix",
    "sniff_delimiter",
    "CsvFormatError",
    "DatasetBuildError",
    "SourceNotFoundError",
    "DatasetStore",
    "write_json_atomic",
]
