"""
Component registry for the portal
Each component exposes an init_<name>(app) function that registers its blueprint.
"""


class ComponentRegistry:
    """Registry for portal components"""

    def __init__(self):
        self.components = {}

    def register_component(self, name, init_func):
        """Register a portal component"""
        self.components[name] = init_func

    def get_component(self, name):
        """Get a registered component"""
        return self.components.get(name)

    def get_all_components(self):
        """Get all registered components"""
        return self.components

    def init_app(self, app):
        """Initialize every registered component, in registration order"""
        return {name: init_func(app) for name, init_func in self.components.items()}


# Global registry instance
registry = ComponentRegistry()


def register_component(name):
    """Decorator for registering component init functions"""
    def decorator(init_func):
        registry.register_component(name, init_func)
        return init_func
    return decorator


__all__ = ['ComponentRegistry', 'registry', 'register_component']
