"""
Agent Chain Presets

Built-in agents, common chains and the preset manifest source.
"""
from .builtin import builtin_agents, PRESET_AGENT_IDS
from .chains import common_chains, COMMON_CHAIN_IDS
from .source import PresetManifestSource, PresetFetchError, parse_manifest

__all__ = [
    'builtin_agents',
    'PRESET_AGENT_IDS',
    'common_chains',
    'COMMON_CHAIN_IDS',
    'PresetManifestSource',
    'PresetFetchError',
    'parse_manifest',
]
