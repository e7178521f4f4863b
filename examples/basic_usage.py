#!/usr/bin/env python3
"""Example of basic registry usage."""

from llm_registry import LLMRegistry, ProviderNotFoundError


def print_provider_info(registry, provider_id):
    """Print information about a provider.

    Args:
        registry: Registry to query
        provider_id: ID of the provider to look up
    """
    try:
        print(f"Provider: {provider_id}")
        print(f"  Website: {registry.get_provider_website(provider_id) or '-'}")

        auth = registry.get_provider_auth(provider_id)
        if auth:
            print(f"  Auth: {auth}")

        models = registry.get_provider_models(provider_id)
        print(f"  Models ({len(models)}):")
        for model in models:
            print(f"    - {model.id}" + (f" ({model.name})" if model.name else ""))
        print()
    except ProviderNotFoundError as e:
        print(f"Error getting information for {provider_id}: {e}")


def main():
    """Run the example."""
    # Local copy if one was synced, otherwise the bundled data
    registry = LLMRegistry.get_default()

    for provider in registry.list_providers():
        print_provider_info(registry, provider.id)

    # Unknown ids raise instead of returning empty results
    print_provider_info(registry, "no-such-provider")

    # The latest published registry, straight from the network
    try:
        latest = LLMRegistry.fetch()
        print(f"Remote registry lists {len(latest.list_providers())} providers")
    except Exception as e:
        print(f"Could not fetch the remote registry: {e}")


if __name__ == "__main__":
    main()
