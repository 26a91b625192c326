"""
Async client for the users API, plus a small command line wrapper.

Any non-2xx answer is treated the same way: logged and raised as
ApiClientError carrying the status and decoded body.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """The API answered with a non-2xx status"""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {body}")


class UsersApiClient:
    """Client for /v1/users"""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, payload: Optional[Dict] = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(method, path, headers=self._headers(), json=payload)

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = {"raw_response": response.text}

        if not response.is_success:
            logger.error(f"{method} {path} failed with {response.status_code}: {body}")
            raise ApiClientError(response.status_code, body)
        return body

    async def list_users(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/v1/users")

    async def create_user(self, email: str, name: str) -> Dict[str, Any]:
        created = await self._request("POST", "/v1/users", {"email": email, "name": name})
        logger.info(f"User created: {created['id']}")
        return created


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(description="List or create users through the CRUD API")
    parser.add_argument(
        "--base-url",
        default=os.getenv("API_BASE_URL", "http://localhost:8080"),
        help="API base URL (default: $API_BASE_URL or http://localhost:8080)"
    )
    parser.add_argument(
        "--token",
        default=os.getenv("API_TOKEN"),
        help="Bearer token, needed only when the server runs with ENABLE_AUTH"
    )

    subcommands = parser.add_subparsers(dest="command", required=True)
    subcommands.add_parser("list", help="List all users")
    create = subcommands.add_parser("create", help="Create a user")
    create.add_argument("--email", required=True)
    create.add_argument("--name", required=True)
    return parser


async def run_command(args: argparse.Namespace) -> Any:
    client = UsersApiClient(args.base_url, token=args.token)
    if args.command == "list":
        return await client.list_users()
    return await client.create_user(args.email, args.name)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    logging.basicConfig(level=logging.INFO)
    args = create_argument_parser().parse_args(argv)

    try:
        result = asyncio.run(run_command(args))
    except ApiClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Error: could not reach {args.base_url}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
