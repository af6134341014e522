from zendesk_provider.exceptions.base import BaseProviderException


class ResourceDataError(BaseProviderException):
    pass


class UnknownResourceTypeError(BaseProviderException):
    def __init__(self, type_name: str, available_types: list[str]):
        base_message = f"Resource type {type_name} is not implemented."
        super().__init__(f"{base_message} Available types: {available_types}")


class ProviderNotConfiguredError(BaseProviderException):
    pass
