from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    ARGUMENT = "ARGUMENT"
    FILE_OPEN = "FILE_OPEN"
    PARSE = "PARSE"
    CLUSTERING = "CLUSTERING"
    IO = "IO"


# Diagnostic prefix written by the top-level handler for each kind
DIAGNOSTICS: Dict[ErrorKind, str] = {
    ErrorKind.ARGUMENT: "Invalid arguments",
    ErrorKind.FILE_OPEN: "File error",
    ErrorKind.PARSE: "Parse error",
    ErrorKind.CLUSTERING: "Clustering error",
    ErrorKind.IO: "Write error",
}


class ClusterDetectionError(Exception):
    kind: ErrorKind = ErrorKind.ARGUMENT

    def __init__(self, code: str, message: str, context: str = ""):
        super().__init__(message)
        self.code = code
        self.context = context


class ArgumentError(ClusterDetectionError):
    kind = ErrorKind.ARGUMENT


class FileOpenError(ClusterDetectionError):
    kind = ErrorKind.FILE_OPEN


class ParseError(ClusterDetectionError):
    kind = ErrorKind.PARSE


class ClusteringError(ClusterDetectionError):
    kind = ErrorKind.CLUSTERING


class ResultWriteError(ClusterDetectionError):
    kind = ErrorKind.IO
