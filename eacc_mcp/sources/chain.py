"""
On-chain job source: read-only access to the EACC marketplace contract.

No signer and no private key: only ``view`` functions are called. The
contract is reached over JSON-RPC with web3's async provider and is bound
lazily, on first use, so a misconfigured or unreachable RPC surfaces as a
tool-level error instead of a crash at startup.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from eacc_mcp.config import DEFAULT_RPC_URL
from eacc_mcp.protocols import SourceInitializationError, SourceUnavailableError
from eacc_mcp.types import Job

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = "0x" + "00" * 32

# On-chain JobState codes
JOB_STATES = {0: "open", 1: "taken", 2: "closed"}

# Field order of the JobPost struct returned by getJob()
JOB_POST_FIELDS = [
    "state",
    "whitelistWorkers",
    "roles",
    "title",
    "tags",
    "contentHash",
    "multipleApplicants",
    "amount",
    "token",
    "timestamp",
    "maxTime",
    "deliveryMethod",
    "collateralOwed",
    "escrowId",
    "resultHash",
    "rating",
    "disputed",
]

# Minimal ABI: the two view functions the source needs
MARKETPLACE_ABI = [
    {
        "inputs": [],
        "name": "jobsLength",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "jobId_", "type": "uint256"}],
        "name": "getJob",
        "outputs": [
            {
                "components": [
                    {"internalType": "uint8", "name": "state", "type": "uint8"},
                    {"internalType": "bool", "name": "whitelistWorkers", "type": "bool"},
                    {
                        "components": [
                            {"internalType": "address", "name": "creator", "type": "address"},
                            {"internalType": "address", "name": "arbitrator", "type": "address"},
                            {"internalType": "address", "name": "worker", "type": "address"},
                        ],
                        "internalType": "struct JobRoles",
                        "name": "roles",
                        "type": "tuple",
                    },
                    {"internalType": "string", "name": "title", "type": "string"},
                    {"internalType": "string[]", "name": "tags", "type": "string[]"},
                    {"internalType": "bytes32", "name": "contentHash", "type": "bytes32"},
                    {"internalType": "bool", "name": "multipleApplicants", "type": "bool"},
                    {"internalType": "uint256", "name": "amount", "type": "uint256"},
                    {"internalType": "address", "name": "token", "type": "address"},
                    {"internalType": "uint32", "name": "timestamp", "type": "uint32"},
                    {"internalType": "uint32", "name": "maxTime", "type": "uint32"},
                    {"internalType": "string", "name": "deliveryMethod", "type": "string"},
                    {"internalType": "uint256", "name": "collateralOwed", "type": "uint256"},
                    {"internalType": "uint256", "name": "escrowId", "type": "uint256"},
                    {"internalType": "bytes32", "name": "resultHash", "type": "bytes32"},
                    {"internalType": "uint8", "name": "rating", "type": "uint8"},
                    {"internalType": "bool", "name": "disputed", "type": "bool"},
                ],
                "internalType": "struct JobPost",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


def _hex(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        text = "0x" + bytes(value).hex()
    else:
        text = str(value)
    return None if text == ZERO_HASH else text


def _address(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return None if text.lower() == ZERO_ADDRESS else text


def decode_job_post(job_id: int, raw: Any) -> Job:
    """Map a getJob() return value onto a Job.

    ``raw`` is either a tuple in JobPost field order or a mapping keyed by
    field name. Unknown state codes, zero addresses and zero hashes become
    absent fields.
    """
    if isinstance(raw, dict):
        post: Dict[str, Any] = dict(raw)
    else:
        post = dict(zip(JOB_POST_FIELDS, raw))

    roles = post.get("roles")
    if isinstance(roles, dict):
        creator, worker = roles.get("creator"), roles.get("worker")
    elif isinstance(roles, Sequence) and len(roles) == 3:
        creator, _arbitrator, worker = roles
    else:
        creator = worker = None

    state = post.get("state")
    timestamp = post.get("timestamp")
    amount = post.get("amount")
    escrow_id = post.get("escrowId")
    tags = post.get("tags")
    token = _address(post.get("token"))

    # Native amounts are wei; ERC-20 amounts stay in base units
    payment = None
    if amount is not None and token is None:
        payment = Decimal(AsyncWeb3.from_wei(amount, "ether"))
    elif amount is not None:
        payment = Decimal(amount)

    return Job(
        id=job_id,
        escrow_id=int(escrow_id) if escrow_id is not None else None,
        title=post.get("title"),
        tags=tuple(tags) if tags is not None else None,
        status=JOB_STATES.get(state) if isinstance(state, int) else None,
        payment_amount=payment,
        payment_token=token,
        timestamp=int(timestamp) if timestamp is not None and timestamp > 0 else None,
        creator=_address(creator),
        worker=_address(worker),
        content_hash=_hex(post.get("contentHash")),
    )


class ChainJobSource:
    """JobSource backed by the marketplace contract.

    Args:
        marketplace_address: Marketplace contract address.
        rpc_url: JSON-RPC endpoint.
        timeout: Seconds allowed for each contract call.
        contract: Pre-bound contract object (skips connecting; for tests and
            embedding).
    """

    def __init__(
        self,
        marketplace_address: Optional[str] = None,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: float = 30.0,
        contract: Any = None,
    ):
        self.marketplace_address = marketplace_address
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._contract = contract
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings) -> "ChainJobSource":
        return cls(
            marketplace_address=settings.marketplace_address,
            rpc_url=settings.rpc_url,
            timeout=settings.rpc_timeout,
        )

    async def connect(self) -> None:
        """Bind the contract. Safe to call repeatedly."""
        if self._contract is not None:
            return
        async with self._lock:
            if self._contract is not None:
                return
            if not self.marketplace_address:
                raise SourceInitializationError(
                    "EACC_MARKETPLACE_ADDRESS is not set; cannot locate the marketplace contract"
                )
            try:
                address = AsyncWeb3.to_checksum_address(self.marketplace_address)
            except ValueError as e:
                raise SourceInitializationError(
                    f"Invalid marketplace address: {self.marketplace_address}"
                ) from e

            logger.info(f"Connecting to marketplace {address} via {self.rpc_url}")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.rpc_url))
            try:
                connected = await asyncio.wait_for(w3.is_connected(), self.timeout)
            except asyncio.TimeoutError as e:
                raise SourceInitializationError(f"Timed out connecting to RPC: {self.rpc_url}") from e
            if not connected:
                raise SourceInitializationError(f"Cannot connect to RPC: {self.rpc_url}")

            self._contract = w3.eth.contract(address=address, abi=MARKETPLACE_ABI)
            logger.info("Provider connected")

    async def _call(self, function_name: str, *args: Any) -> Any:
        await self.connect()
        fn = getattr(self._contract.functions, function_name)(*args)
        try:
            return await asyncio.wait_for(fn.call(), self.timeout)
        except asyncio.TimeoutError as e:
            raise SourceUnavailableError(f"RPC call timed out after {self.timeout}s") from e

    async def count(self) -> int:
        return int(await self._call("jobsLength"))

    async def _read_job(self, job_id: int) -> Job:
        raw = await self._call("getJob", job_id)
        return decode_job_post(job_id, raw)

    async def range(self, start: int, end: int) -> List[Job]:
        start = max(0, start)
        jobs: List[Job] = []
        for job_id in range(start, end):
            jobs.append(await self._read_job(job_id))
        return jobs

    async def by_id(self, job_id: int) -> Optional[Job]:
        if job_id < 0:
            return None
        if job_id >= await self.count():
            return None
        try:
            return await self._read_job(job_id)
        except ContractLogicError as e:
            logger.info(f"getJob({job_id}) reverted: {e}")
            return None
