from typing import Any

class Translation:
    """
    A response from a translation provider.

    Candidates are the serialized result sets returned by the provider, in the order
    they were returned. Only the first one is used.
    """
    def __init__(self, content : dict[str, Any]):
        self.content : dict[str, Any] = content or {}

    @property
    def candidates(self) -> list[str]:
        candidates = self.content.get('candidates') or []
        return [ candidate for candidate in candidates if candidate ]

    @property
    def has_candidates(self) -> bool:
        return True if self.candidates else False

    @property
    def text(self) -> str|None:
        text = self.content.get('text')
        return text.strip() if text else None

    @property
    def finish_reason(self) -> str|None:
        return self.content.get('finish_reason')

    @property
    def prompt_tokens(self) -> int|None:
        return self.content.get('prompt_tokens')

    @property
    def output_tokens(self) -> int|None:
        return self.content.get('output_tokens')

    @property
    def reached_token_limit(self) -> bool:
        return self.finish_reason == "length"

    @property
    def quota_reached(self) -> bool:
        return self.finish_reason == "quota_reached"

    def FormatResponse(self, include_text : bool = True) -> str:
        """
        Format the response for display
        """
        if not self.content:
            return "No translation"

        content_keys = [k for k in self.content.keys() if k not in ['text', 'candidates']]
        metadata = [ f"{k}: {self.content[k]}" for k in content_keys if self.content.get(k) ]

        body = '\n\n'.join(self.candidates) or self.text or ""

        if metadata:
            metadata_text = '\n'.join(metadata)
            return f"{metadata_text}\n\n{body}" if include_text else metadata_text
        else:
            return body if include_text else "No metadata available"
