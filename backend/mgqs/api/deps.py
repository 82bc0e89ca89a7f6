from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from mgqs.flows.llm_client import LLMClient
from mgqs.flows.username import InMemoryUsernameDirectory, UsernameDirectory


@lru_cache
def get_llm_client() -> LLMClient:
    return LLMClient()


@lru_cache
def get_username_directory() -> UsernameDirectory:
    return InMemoryUsernameDirectory()


LLMDep = Annotated[LLMClient, Depends(get_llm_client)]
UsernameDirectoryDep = Annotated[UsernameDirectory, Depends(get_username_directory)]
