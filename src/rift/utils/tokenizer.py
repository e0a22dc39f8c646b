# src/rift/utils/tokenizer.py
import logging

import tiktoken

logger = logging.getLogger(__name__)


class Tokenizer:
    """Token estimates for resolved outputs, shown in the run summary."""
    _encoding = None
    _unavailable = False

    @classmethod
    def get_encoding(cls):
        if cls._encoding is None:
            try:
                cls._encoding = tiktoken.get_encoding("cl100k_base")
            except Exception:
                cls._encoding = tiktoken.get_encoding("p50k_base")
        return cls._encoding

    @classmethod
    def count(cls, text: str) -> int:
        """Estimates token count for a given text."""
        if not cls._unavailable:
            try:
                return len(cls.get_encoding().encode(text))
            except Exception as e:
                # Encodings are fetched on first use; offline runs land here
                logger.debug("tiktoken unavailable, estimating tokens: %s", e)
                cls._unavailable = True
        return len(text) // 4
