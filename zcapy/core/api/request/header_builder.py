"""Default request headers matching the Zalo web client."""
from typing import Dict, Mapping, Optional

DEFAULT_ORIGIN = 'https://chat.zalo.me'

DEFAULT_HEADERS: Dict[str, str] = {
    'Accept': 'application/json, text/plain, */*',
    'Accept-Encoding': 'gzip, deflate',
    'Accept-Language': 'en-US,en;q=0.9',
    'Cache-Control': 'no-cache',
    'Sec-Ch-Ua': '"Chromium";v="128", "Not;A=Brand";v="24"',
    'Sec-Ch-Ua-Mobile': '?0',
    'Sec-Ch-Ua-Platform': '"macOS"',
    'Sec-Fetch-Dest': 'empty',
    'Sec-Fetch-Mode': 'cors',
    'Sec-Fetch-Site': 'same-site',
}


class HeaderBuilder:
    """Builds request headers."""

    def __init__(self, origin: str = DEFAULT_ORIGIN,
                 extra_headers: Optional[Mapping[str, str]] = None):
        self.origin = origin.rstrip('/')
        self.extra_headers = dict(extra_headers or {})

    def build(self, user_agent: str, cookie: Optional[str] = None,
              headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Builds the header set for one request.

        Per-request headers override the defaults and configured extras.
        """
        result = {
            'User-Agent': user_agent,
            **DEFAULT_HEADERS,
            'Origin': self.origin,
            'Referer': f"{self.origin}/",
            **self.extra_headers,
        }
        if cookie:
            result['Cookie'] = cookie
        if headers:
            result.update(headers)
        return result
