import typing
import logging
import contextlib

import aiohttp

from bsvalias.conf import Config

log = logging.getLogger(__name__)

Transport = typing.Callable[[str, dict], typing.Awaitable[typing.Any]]


@contextlib.asynccontextmanager
async def aiohttp_request(method, url, **kwargs) -> typing.AsyncIterator[aiohttp.ClientResponse]:
    async with aiohttp.ClientSession() as session:
        async with session.request(method, url, **kwargs) as response:
            yield response


class JSONTransport:
    """ POSTs a JSON body and returns the decoded JSON response. No retries. """

    def __init__(self, timeout: float = 30.0, user_agent: str = 'bsvalias'):
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, conf: Config) -> 'JSONTransport':
        return cls(timeout=conf.request_timeout, user_agent=conf.user_agent)

    async def __call__(self, url: str, body: dict):
        log.debug("POST %s", url)
        async with aiohttp_request(
                'post', url, json=body,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent, "Accept": "application/json"}
        ) as response:
            response.raise_for_status()
            result = await response.json(content_type=None)
            log.debug("%s responded with status %i", url, response.status)
            return result
