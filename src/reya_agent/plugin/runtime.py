"""
Host runtime boundary.

Defines what the plugin consumes from the agent runtime (settings and a
text-completion capability) and the provider/action contracts it exposes.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Protocol

from ..interaction.dispatch_gate import DispatchFlags

logger = logging.getLogger(__name__)

DISPATCH_STATE_KEY = "smart_dispatch"

HandlerCallback = Callable[[Dict[str, Any]], Awaitable[None]]


class AgentRuntime(Protocol):
    """Capabilities the plugin uses from the host."""
    
    def get_setting(self, key: str) -> Optional[str]:
        ...
    
    async def complete(self, prompt: str) -> str:
        ...


@dataclass(frozen=True)
class Message:
    text: str
    id: Optional[str] = None
    user: Optional[str] = None


@dataclass(frozen=True)
class ProviderResult:
    values: Mapping[str, Any] = field(default_factory=dict)
    data: Mapping[str, Any] = field(default_factory=dict)
    text: Optional[str] = None


@dataclass(frozen=True)
class ActionResult:
    success: bool
    text: str = ""
    values: Mapping[str, Any] = field(default_factory=dict)
    data: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None


class TurnState:
    """
    Read-only per-turn state assembled from provider results.
    
    Each merge returns a new TurnState; nothing downstream can alter what a
    provider published.
    """
    
    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        texts: Iterable[str] = (),
    ):
        self._values = MappingProxyType(dict(values or {}))
        self._data = MappingProxyType(dict(data or {}))
        self._texts = tuple(texts)
    
    @property
    def values(self) -> Mapping[str, Any]:
        return self._values
    
    @property
    def data(self) -> Mapping[str, Any]:
        return self._data
    
    @property
    def text(self) -> str:
        return "\n".join(self._texts)
    
    @property
    def dispatch_flags(self) -> Optional[DispatchFlags]:
        flags = self._values.get(DISPATCH_STATE_KEY)
        return flags if isinstance(flags, DispatchFlags) else None
    
    def merged(self, result: ProviderResult) -> "TurnState":
        texts = self._texts + ((result.text,) if result.text else ())
        return TurnState(
            values={**self._values, **result.values},
            data={**self._data, **result.data},
            texts=texts,
        )


class Provider(ABC):
    """Injects context before reply generation. Lower priority runs first."""
    
    name: str = ""
    description: str = ""
    priority: int = 0
    
    @abstractmethod
    async def get(self, runtime: AgentRuntime, message: Message, state: TurnState) -> ProviderResult:
        ...


class Action(ABC):
    """Runtime-selectable reply producer."""
    
    name: str = ""
    description: str = ""
    similes: List[str] = []
    examples: List[List[Dict[str, Any]]] = []
    
    @abstractmethod
    async def validate(self, runtime: AgentRuntime, message: Message, state: TurnState) -> bool:
        ...
    
    @abstractmethod
    async def handler(
        self,
        runtime: AgentRuntime,
        message: Message,
        state: TurnState,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> ActionResult:
        ...


async def compose_state(
    runtime: AgentRuntime,
    message: Message,
    providers: Iterable[Provider],
) -> TurnState:
    """
    Run providers in priority order, threading each result into the next.
    
    :param runtime: Host runtime
    :param message: Incoming message
    :param providers: Providers in any order
    :return: Final TurnState for the turn
    """
    state = TurnState()
    for provider in sorted(providers, key=lambda p: p.priority):
        result = await provider.get(runtime, message, state)
        state = state.merged(result)
    return state


class LangChainRuntime:
    """
    AgentRuntime backed by a LangChain chat model.
    
    Usage:
        llm = get_llm_instance("groq", "llama-3.1-8b-instant")
        runtime = LangChainRuntime(llm, settings={"REYA_API_BASE_URL": "..."})
    """
    
    def __init__(self, llm, settings: Optional[Mapping[str, str]] = None):
        self._llm = llm
        self._settings = dict(settings or {})
    
    def get_setting(self, key: str) -> Optional[str]:
        return self._settings.get(key)
    
    async def complete(self, prompt: str) -> str:
        response = await self._llm.ainvoke(prompt)
        content = getattr(response, "content", response)
        if isinstance(content, list):
            # Content blocks from multimodal-capable chat models
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return str(content)
