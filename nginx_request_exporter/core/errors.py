"""
Error taxonomy for the Nginx request exporter.

Parse errors are per-message and recoverable, registry errors are
per-metric, and bucket configuration errors are fatal at startup.
"""


class ParseError(Exception):
    """로그 라인 파싱 실패 (메시지 단위)"""


class InvalidMetricValue(ParseError):
    def __init__(self, key: str, value: str = ""):
        self.key = key
        self.value = value
        super().__init__(f"invalid value {value!r} for metric {key!r}")


class MalformedToken(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"malformed token {token!r}")


class DuplicateLabel(ParseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"duplicate label {name!r}")


class MissingHostname(ParseError):
    def __init__(self):
        super().__init__("mandatory label 'hostname' is missing or empty")


class RegistryError(Exception):
    """컬렉터 조회/생성 실패 (메트릭 단위)"""


class LabelSetConflict(RegistryError):
    def __init__(self, name: str, registered, requested):
        self.name = name
        self.registered = tuple(registered)
        self.requested = tuple(requested)
        super().__init__(
            f"metric {name!r} already registered with labels {list(self.registered)}, "
            f"got {list(self.requested)}"
        )


class CollectorRegistrationError(RegistryError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"cannot register histogram {name!r}: {reason}")


class BucketConfigError(ValueError):
    """히스토그램 버킷 설정 오류 (시작 시 치명적)"""
