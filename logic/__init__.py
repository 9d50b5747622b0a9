"""logic — World systems package.

Top-level modules
-----------------
biomes          elevation / moisture noise and biome classification
registry        object placement, removal and footprint queries
worldgen        one-shot world population (forests, mountains, camp)
ambient         cloud and poop spawning, drift and fade
interaction     gather cycles and basecamp deposits
movement        player movement validation
visuals         read-only tile / object views for the renderer
input_manager   raw input → intent mapping
"""
