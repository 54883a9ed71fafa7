"""LLM client utilities."""

from journeyx.shared.llm.client import GenerationResult, call_llm, get_cached_client

__all__ = ["GenerationResult", "call_llm", "get_cached_client"]
