class ScraperError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PageProcessingError(ScraperError):
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to process {url}: {message}")


class OutputWriteError(ScraperError):
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {message}")
