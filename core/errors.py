import errno


class StatError(Exception):
    """A collection cycle failed; nothing from the cycle was committed."""


class SourceUnavailable(StatError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

    @classmethod
    def from_os_error(cls, path, err: OSError):
        reasons = {
            errno.ENOENT: "not found",
            errno.EACCES: "permission denied",
            errno.EPERM: "permission denied",
            errno.EISDIR: "is a directory",
        }
        return cls(path, reasons.get(err.errno, err.strerror or str(err)))


class MalformedRecord(StatError):
    def __init__(self, keyword, token, line_no):
        self.keyword = keyword
        self.token = token
        self.line_no = line_no
        super().__init__(
            f"line {line_no}: bad value {token!r} for {keyword!r}"
        )


class PlatformQueryFailure(StatError):
    pass
