"""Production container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from stackit.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with every production implementation, for the API process."""
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())
