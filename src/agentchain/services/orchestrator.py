"""
Chain Orchestrator

Executes an AgentChain step by step against a task. Each step's output
is carried forward in a context keyed by agent id. Step failures are
recorded in the transcript and never abort the chain.
"""
import inspect
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..models.agent import Agent
from ..models.chain import AgentChain, ChainStep, ChainValidationError
from ..models.output import AgentInput, AgentOutput, StepStatus
from ..presets.chains import common_chains
from .registry_service import AgentRegistry

logger = logging.getLogger("agentchain.services.orchestrator")

MISSING_AGENT_NAME = "Unknown Agent"

StepCallback = Callable[[int, StepStatus, Optional[AgentOutput]], Any]


def apply_input_mapping(mapping: Dict[str, str], context: Dict[str, AgentOutput]) -> Dict[str, Any]:
    """
    Select values from the accumulated context.

    A source is an agent id (that agent's content) or "agentId.field"
    (a field of that agent's output, e.g. "writer-v1.agentName").
    Sources missing from the context are left out.
    """
    mapped: Dict[str, Any] = {}
    for target_key, source in mapping.items():
        if source in context:
            mapped[target_key] = context[source].content
            continue

        agent_id, _, field_name = source.rpartition(".")
        output = context.get(agent_id) if agent_id else None
        if output is None:
            continue
        value = output.to_dict().get(field_name)
        if value is not None:
            mapped[target_key] = value
    return mapped


def build_user_prompt(agent_input: AgentInput) -> str:
    """Render a step input as the user message for the model"""
    prompt = f"Task: {agent_input.task}\n\n"

    if agent_input.context:
        prompt += "Context:\n"
        for key, value in agent_input.context.items():
            rendered = value if isinstance(value, str) else json.dumps(value, indent=2, default=str)
            prompt += f"- {key}: {rendered}\n"
        prompt += "\n"

    previous = agent_input.previous_output
    if previous is not None:
        prompt += f"Previous Output ({previous.agent_name}):\n{previous.content}\n"

    return prompt.rstrip() + "\n"


class ChainOrchestrator:
    """
    Sequential chain executor.

    Holds no per-run state: concurrent executions share only the
    registry (read-only here) and the model invoker.
    """

    def __init__(self, registry: AgentRegistry, invoker):
        """
        Args:
            registry: Agent registry used to resolve step agents
            invoker: Model-call capability with
                     async invoke(system_prompt, user_input, credentials, provider_hint) -> str
        """
        self.registry = registry
        self.invoker = invoker

    async def execute_chain(
        self,
        chain: AgentChain,
        initial_input: Union[AgentInput, str],
        credentials: Optional[str] = None,
        on_step: Optional[StepCallback] = None,
    ) -> List[AgentOutput]:
        """
        Execute every step of a chain in order.

        Args:
            chain: Chain to run (at least one step)
            initial_input: Task text or AgentInput with task and context
            credentials: API key passed to every model call
            on_step: Optional callback(index, status, output) fired when a
                     step starts running and when it finishes

        Returns:
            Exactly one AgentOutput per step, in chain order

        Raises:
            ChainValidationError: If the chain has no steps
        """
        if not chain.agents:
            raise ChainValidationError(f"Chain '{chain.id}' has no steps")

        if isinstance(initial_input, str):
            initial_input = AgentInput(task=initial_input)

        total = len(chain.agents)
        outputs: List[AgentOutput] = []
        context: Dict[str, AgentOutput] = {}
        last_output: Optional[AgentOutput] = None

        logger.info(f"Executing chain: {chain.name} ({chain.id}), steps={total}")

        for index, step in enumerate(chain.agents):
            await self._notify(on_step, index, StepStatus.RUNNING, None)

            agent = self.registry.get_agent(step.agent_id)
            if agent is None:
                logger.warning(f"Chain step {index + 1}/{total}: agent not found: {step.agent_id}")
                output = AgentOutput.failed(
                    step.agent_id, MISSING_AGENT_NAME, f"Agent not found: {step.agent_id}"
                )
            else:
                step_input = self.resolve_step_input(index, step, initial_input, context, last_output)
                output = await self.execute_agent(agent, step_input, credentials)

            outputs.append(output)

            if output.success:
                context[output.agent_id] = output
                last_output = output
                logger.info(f"Chain step {index + 1}/{total} ({output.agent_id}) completed")
            else:
                logger.error(f"Chain step {index + 1}/{total} ({output.agent_id}) failed: {output.error}")

            status = StepStatus.SUCCEEDED if output.success else StepStatus.FAILED
            await self._notify(on_step, index, status, output)

        succeeded = sum(1 for output in outputs if output.success)
        logger.info(f"Chain {chain.id} finished: {succeeded}/{total} steps succeeded")
        return outputs

    def resolve_step_input(
        self,
        index: int,
        step: ChainStep,
        initial_input: AgentInput,
        context: Dict[str, AgentOutput],
        last_output: Optional[AgentOutput],
    ) -> AgentInput:
        """
        Compute one step's input.

        - First step: the initial input, verbatim.
        - Explicit mapping: initial context plus the mapped context values.
        - Otherwise: the task plus the latest successful step output.
        """
        if index == 0:
            return AgentInput(task=initial_input.task, context=dict(initial_input.context))

        if step.has_explicit_mapping:
            mapped = apply_input_mapping(step.input_mapping, context)
            return AgentInput(task=initial_input.task, context={**initial_input.context, **mapped})

        return AgentInput(
            task=initial_input.task,
            context=dict(initial_input.context),
            previous_output=last_output,
        )

    async def execute_agent(
        self,
        agent: Agent,
        agent_input: AgentInput,
        credentials: Optional[str] = None,
    ) -> AgentOutput:
        """Run one agent. Any model-call failure becomes a failed output."""
        prompt = build_user_prompt(agent_input)

        try:
            content = await self.invoker.invoke(
                agent.system_prompt,
                prompt,
                credentials,
                agent.preferred_provider,
            )
        except Exception as e:
            return AgentOutput.failed(agent.id, agent.name, str(e) or e.__class__.__name__)

        if not isinstance(content, str) or not content.strip():
            return AgentOutput.failed(agent.id, agent.name, "Empty response from model")

        return AgentOutput.succeeded(
            agent.id,
            agent.name,
            content,
            metadata={
                "role": agent.role.value,
                "version": agent.version,
                "provider": agent.preferred_provider.value if agent.preferred_provider else None,
            },
        )

    async def initialize_common_chains(self) -> int:
        """Register the built-in chains that are not present yet"""
        added = await self.registry.register_chains_if_absent(common_chains())
        if added:
            logger.info(f"Registered {added} common chains")
        return added

    @staticmethod
    async def _notify(
        callback: Optional[StepCallback],
        index: int,
        status: StepStatus,
        output: Optional[AgentOutput],
    ):
        if callback is None:
            return
        try:
            result = callback(index, status, output)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(f"Step callback failed at step {index + 1}: {e}")
