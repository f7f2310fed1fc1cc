class AnalysisError(RuntimeError):
    def __init__(self, message: str, *, code: str = "analysis_failed"):
        super().__init__(message)
        self.code = code


class ProviderUnavailable(AnalysisError):
    def __init__(self, message: str, *, code: str = "provider_unavailable"):
        super().__init__(message, code=code)


class ProviderInvocationFailed(AnalysisError):
    def __init__(self, message: str, *, code: str = "provider_invocation_failed"):
        super().__init__(message, code=code)


class MalformedProviderResult(ProviderInvocationFailed):
    def __init__(self, message: str, *, code: str = "malformed_provider_result"):
        super().__init__(message, code=code)


class ScoringEngineFailed(AnalysisError):
    def __init__(self, message: str, *, code: str = "scoring_engine_failed"):
        super().__init__(message, code=code)
