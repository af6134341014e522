import re
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Record

REDACTED = "[REDACTED]"
# characters of a masked value left visible when not fully hiding it
VISIBLE_PREFIX = 6

# Credentials that can reach a log line through request errors or API responses
builtin_patterns = {
    "Basic authorization header": r"Basic [A-Za-z0-9+/=]{16,}",
    "Bearer authorization header": r"Bearer [A-Za-z0-9\-._~+/]{16,}=*",
    "API token credentials": r"[^\s/:@\"']+@[^\s/:@\"']+/token:[A-Za-z0-9]{16,}",
    "Password in URL": r"[a-zA-Z]{3,10}:\/\/[^\/\s:@]{3,20}:[^\/\s:@]{3,20}@",
    "Webhook signing secret": r"\"secret\"\s*:\s*\"[^\"]{8,}\"",
    "Private key block": r"-----BEGIN [A-Z ]*PRIVATE KEY-----",
}


class SensitiveLogFilter:
    """
    Masks credentials in log messages. Patterns are shared by every instance so
    a secret registered once (the API token, target passwords) is hidden from
    every sink.
    """

    compiled_patterns = [re.compile(pattern) for pattern in builtin_patterns.values()]

    def hide_sensitive_strings(self, *tokens: str) -> None:
        for token in tokens:
            if token and token.strip():
                self.compiled_patterns.append(re.compile(re.escape(token.strip())))

    def _replacement(self, full_hide: bool) -> Callable[[re.Match[str]], str] | str:
        if full_hide:
            return REDACTED
        return lambda match: match.group()[:VISIBLE_PREFIX] + REDACTED

    def mask_string(self, string: str, full_hide: bool = False) -> str:
        replacement = self._replacement(full_hide)
        for pattern in self.compiled_patterns:
            string = pattern.sub(replacement, string)
        return string

    def mask_object(self, obj: Any, full_hide: bool = False) -> Any:
        """Masked copy of a JSON-like value, the original is left untouched"""
        match obj:
            case str():
                return self.mask_string(obj, full_hide)
            case list() | tuple():
                return [self.mask_object(item, full_hide) for item in obj]
            case dict():
                return {k: self.mask_object(v, full_hide) for k, v in obj.items()}
        return obj

    def create_filter(self, full_hide: bool = False) -> Callable[["Record"], bool]:
        def _filter(record: "Record") -> bool:
            record["message"] = self.mask_string(record["message"], full_hide)
            if record["extra"]:
                record["extra"].update(self.mask_object(record["extra"], full_hide))
            return True

        return _filter


sensitive_log_filter = SensitiveLogFilter()
