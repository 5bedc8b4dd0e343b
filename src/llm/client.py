"""
Async client for the Anthropic Messages API.

GenerationClient wraps one stateless request/response exchange with the
text-generation service: it builds the request, executes it over httpx,
classifies the outcome, and retries retryable failures with exponential
backoff.

Usage:
    async with GenerationClient(GenerationConfig.from_env()) as client:
        text = await client.call(system_prompt, transcript, max_tokens=16384)
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import httpx

from .config import GenerationConfig


logger = logging.getLogger("llm")


class GenerationError(Exception):
    """Base error for a failed generation request."""

    retryable = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TerminalGenerationError(GenerationError):
    """Client-side failure (bad auth, malformed request); never retried."""


class RetryableGenerationError(GenerationError):
    """Rate limit, server error, or transport failure; retried with backoff."""

    retryable = True


class ResponseClass(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


def classify_status(status_code: int) -> ResponseClass:
    """
    Classify an HTTP status code for retry purposes.

    Args:
        status_code: HTTP status returned by the generation service

    Returns:
        SUCCESS for 200, TERMINAL for 4xx other than 429, RETRYABLE otherwise
    """
    if status_code == 200:
        return ResponseClass.SUCCESS
    if 400 <= status_code < 500 and status_code != 429:
        return ResponseClass.TERMINAL
    return ResponseClass.RETRYABLE


async def gather_all_or_nothing(*aws: Awaitable) -> list:
    """
    Await coroutines concurrently, returning their results in argument order.

    The first failure cancels every sibling still running, waits for them to
    finish unwinding, then is raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


@dataclass(frozen=True)
class GenerationRequest:
    system_prompt: str
    user_message: str
    max_tokens: int = 4096


class GenerationClient:
    """
    Stateless text-generation client with bounded retries.

    Args:
        config: Explicit API and retry configuration
        http_client: Optional pre-built httpx.AsyncClient (not closed by this client)
        sleep: Coroutine used for backoff waits (default: asyncio.sleep)
    """

    def __init__(
        self,
        config: GenerationConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._sleep = sleep

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds)
            )
        return self._http_client

    def _build_payload(self, request: GenerationRequest) -> dict:
        return {
            "model": self.config.model,
            "max_tokens": request.max_tokens,
            "system": request.system_prompt,
            "messages": [
                {
                    "role": "user",
                    "content": request.user_message,
                }
            ],
        }

    def _build_headers(self) -> dict:
        return {
            "x-api-key": self.config.api_key or "",
            "anthropic-version": self.config.anthropic_version,
            "content-type": "application/json",
        }

    async def _attempt(self, request: GenerationRequest) -> str:
        """Execute a single request and return its text or raise a classified error."""
        url = f"{self.config.base_url.rstrip('/')}/messages"
        try:
            response = await asyncio.wait_for(
                self._get_http_client().post(
                    url,
                    headers=self._build_headers(),
                    json=self._build_payload(request),
                ),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise RetryableGenerationError(
                f"Request timed out after {self.config.timeout_seconds}s"
            ) from e
        except httpx.TransportError as e:
            raise RetryableGenerationError(
                f"Transport failure: {type(e).__name__}: {e}"
            ) from e

        status = response.status_code
        outcome = classify_status(status)
        if outcome is ResponseClass.TERMINAL:
            raise TerminalGenerationError(
                f"Generation API error: {status} - {response.text}", status_code=status
            )
        if outcome is ResponseClass.RETRYABLE:
            raise RetryableGenerationError(
                f"Generation API error: {status} - {response.text}", status_code=status
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RetryableGenerationError(
                "Generation API returned a malformed body", status_code=status
            ) from e
        if not isinstance(data, dict):
            raise RetryableGenerationError(
                "Generation API returned an unexpected body", status_code=status
            )

        usage = data.get("usage") or {}
        if usage:
            logger.debug(
                f"Token usage - input: {usage.get('input_tokens')}, "
                f"output: {usage.get('output_tokens')}"
            )

        blocks = data.get("content") or []
        return "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )

    async def generate(self, request: GenerationRequest) -> str:
        """
        Run a request with retries.

        Args:
            request: System prompt, user message and output token budget

        Returns:
            Text payload of the model response

        Raises:
            TerminalGenerationError: On a non-retryable response or missing API key
            RetryableGenerationError: When every attempt failed with a retryable error
        """
        if not self.config.api_key:
            raise TerminalGenerationError("Anthropic API key is not configured")

        max_attempts = self.config.max_attempts
        last_error: Optional[RetryableGenerationError] = None

        for attempt in range(1, max_attempts + 1):
            logger.info(
                f"Calling {self.config.model} (attempt {attempt}/{max_attempts}, "
                f"{len(request.user_message)} chars, max_tokens={request.max_tokens})"
            )
            try:
                return await self._attempt(request)
            except TerminalGenerationError as e:
                logger.error(f"Generation attempt {attempt} failed, not retrying: {e}")
                raise
            except RetryableGenerationError as e:
                last_error = e
                logger.warning(f"Generation attempt {attempt} failed: {e}")

            if attempt < max_attempts:
                wait_time = 2**attempt * self.config.backoff_base
                logger.info(f"Waiting {wait_time:.1f}s before retry...")
                await self._sleep(wait_time)

        raise last_error or RetryableGenerationError(
            "Generation call failed after all retries"
        )

    async def call(
        self, system_prompt: str, user_message: str, max_tokens: int = 4096
    ) -> str:
        """Send one system prompt + user message pair and return the response text."""
        return await self.generate(
            GenerationRequest(
                system_prompt=system_prompt,
                user_message=user_message,
                max_tokens=max_tokens,
            )
        )

    async def call_batch(self, requests: list[GenerationRequest]) -> list[str]:
        """
        Run independent requests concurrently.

        Results are returned in input order. The batch is all-or-nothing: the
        first failure cancels the remaining requests and is raised.
        """
        return await gather_all_or_nothing(*(self.generate(request) for request in requests))
