"""
Samplers backed by external services.

``ColorApiSampler`` names the colour at a hue (the domain point) for a given
saturation and lightness using The Color API. A colour name is the identity;
the whole JSON document is the payload.
"""

from typing import Any, Dict, Optional

import httpx

from advs.cancellation import CancellationToken
from advs.types import DomainPoint, Sample, SamplingContext

COLOR_API_URL = "https://www.thecolorapi.com/id"


def format_hsl(hue: DomainPoint, saturation: float, lightness: float) -> str:
    return f"({hue},{saturation:g}%,{lightness:g}%)"


def color_identity(document: Dict[str, Any]) -> str:
    """Extract the colour name from a Color API response."""
    try:
        name = document["name"]["value"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Response has no colour name: {document!r}") from exc
    if not isinstance(name, str):
        raise ValueError(f"Colour name is not a string: {name!r}")
    return name


class ColorApiSampler:
    """
    Async sampler for hue names under an (saturation, lightness) context.

    The API has no documented rate limit, so calls are not throttled. The
    sampler can share a caller-provided ``httpx.AsyncClient``; otherwise it
    creates one and closes it in ``aclose``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        url: str = COLOR_API_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
        self.url = url

    async def __call__(
        self,
        point: DomainPoint,
        context: SamplingContext,
        token: CancellationToken,
    ) -> Sample:
        # Aborted requests surface as task cancellation from the cache
        saturation, lightness = context.values[0], context.values[1]
        response = await self.client.get(
            self.url, params={"hsl": format_hsl(point, saturation, lightness)}
        )
        response.raise_for_status()
        document = response.json()
        return Sample(point=point, identity=color_identity(document), payload=document)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ColorApiSampler":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
