class FeesChartError(Exception):
    """Failure of a fees chart call.

    `code` is the numeric error class, `message` a stable machine-readable
    string that callers can match on.
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__("[%d, %s]" % (code, message))


class InvalidArgument(FeesChartError):
    def __init__(self, message: str):
        super().__init__(400, message)


class UpstreamUnavailable(FeesChartError):
    def __init__(self, message: str):
        super().__init__(503, message)
