"""
Common Chains

Fixed chain definitions registered by
ChainOrchestrator.initialize_common_chains().
"""
from typing import List

from ..models.chain import AgentChain, ChainStep

_CHAIN_RECORDS = [
    # Educational chains
    {
        "id": "learning-experience-v1",
        "name": "Complete Learning Experience",
        "description": "Full learning pipeline: Curriculum → Visual → Practice → Empathy",
        "agents": [
            ("curriculum-architect-v1", None),
            ("visual-storyteller-v1", {"curriculum": "curriculum-architect-v1"}),
            ("practice-designer-v1", {"visual": "visual-storyteller-v1"}),
            ("empathy-guide-v1", {"practice": "practice-designer-v1"}),
        ],
    },
    {
        "id": "interactive-learning-v1",
        "name": "Interactive Socratic Learning",
        "description": "Guided discovery: Curriculum → Socratic → Empathy",
        "agents": [
            ("curriculum-architect-v1", None),
            ("socratic-questioner-v1", {"curriculum": "curriculum-architect-v1"}),
            ("empathy-guide-v1", {"questions": "socratic-questioner-v1"}),
        ],
    },
    {
        "id": "visual-learning-v1",
        "name": "Visual-First Learning",
        "description": "Learn through visuals: Curriculum → Visual → Empathy",
        "agents": [
            ("curriculum-architect-v1", None),
            ("visual-storyteller-v1", {"curriculum": "curriculum-architect-v1"}),
            ("empathy-guide-v1", {"visual": "visual-storyteller-v1"}),
        ],
    },
    {
        "id": "practice-focused-v1",
        "name": "Practice-Driven Learning",
        "description": "Learn by doing: Curriculum → Practice → Empathy",
        "agents": [
            ("curriculum-architect-v1", None),
            ("practice-designer-v1", {"curriculum": "curriculum-architect-v1"}),
            ("empathy-guide-v1", {"practice": "practice-designer-v1"}),
        ],
    },
    # General content chains
    {
        "id": "content-creation-v1",
        "name": "Content Creation Pipeline",
        "description": "Full pipeline: Research → Plan → Write → Review",
        "agents": [
            ("researcher-v1", None),
            ("planner-v1", {"research": "researcher-v1"}),
            ("writer-v1", {"plan": "planner-v1", "research": "researcher-v1"}),
            ("reviewer-v1", {"content": "writer-v1"}),
        ],
    },
    {
        "id": "research-review-v1",
        "name": "Research with Review",
        "description": "Research with quality review",
        "agents": [
            ("researcher-v1", None),
            ("reviewer-v1", {"research": "researcher-v1"}),
        ],
    },
]

COMMON_CHAIN_IDS = [record["id"] for record in _CHAIN_RECORDS]


def common_chains() -> List[AgentChain]:
    """Fresh AgentChain instances for every common chain"""
    return [
        AgentChain(
            id=record["id"],
            name=record["name"],
            description=record["description"],
            agents=[
                ChainStep(agent_id=agent_id, input_mapping=dict(mapping) if mapping else None)
                for agent_id, mapping in record["agents"]
            ],
        )
        for record in _CHAIN_RECORDS
    ]
