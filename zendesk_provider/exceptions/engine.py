from zendesk_provider.exceptions.base import BaseProviderException


class EngineException(BaseProviderException):
    pass


class ManifestError(EngineException):
    pass


class StateError(EngineException):
    pass


class ReferenceResolutionError(ManifestError):
    pass


class ApplyError(EngineException):
    pass
