"""Main dependency injection container configuration."""

from collections.abc import Mapping

from dependency_injector import containers, providers

from careerecon.infrastructure.containers.data_providers import configure_data_providers


class Container(containers.DeclarativeContainer):
    """Dependency injection container for careerecon.

    To provide your own environment snapshot (for library integrators):
        container = get_container(environ={"BLS_API_KEY": "your-key"})

    Or override after creation:
        container = Container()
        container.series_data_provider.override(providers.Object(my_provider))
    """

    environ_config = providers.Object(None)

    # Data providers (singletons, configured once per container)
    _data_providers_config = providers.Singleton(
        configure_data_providers,
        environ=environ_config,
    )

    series_cache = providers.Callable(
        lambda config: config["series_cache"](),
        config=_data_providers_config,
    )
    series_data_provider = providers.Callable(
        lambda config: config["series_data_provider"](),
        config=_data_providers_config,
    )
    entity_series_mapper = providers.Callable(
        lambda config: config["entity_series_mapper"](),
        config=_data_providers_config,
    )
    career_economic_service = providers.Callable(
        lambda config: config["career_economic_service"](),
        config=_data_providers_config,
    )


# Global container instance (can be overridden for testing)
_container: Container | None = None


def get_container(environ: Mapping[str, str] | None = None) -> Container:
    """Get the global dependency injection container.

    Args:
        environ: Optional environment snapshot for BLS client config. When given,
                 a new container is returned and the global one is left alone.

    Returns:
        Container instance
    """
    global _container
    if environ is not None:
        container_instance = Container()
        container_instance.environ_config.override(providers.Object(environ))
        return container_instance
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Set a custom container (useful for testing)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    _container = None
