"""simulation — The World aggregate.

Submodules
----------
world           World — owns the grid, registry, player, ambient layer
                and interaction engine; one ``update(dt)`` per frame
"""
