class DatasetBuildError(Exception):
    """Fatal build error; nothing is written when one is raised."""


class SourceNotFoundError(DatasetBuildError):
    pass


class CsvFormatError(DatasetBuildError):
    pass
