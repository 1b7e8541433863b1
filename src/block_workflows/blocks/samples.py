"""Sample inputs and predefined multi-block workflows for demos and the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from block_workflows.blocks.registry import BlockRegistry


@dataclass(frozen=True, slots=True)
class SampleWorkflow:
    key: str
    name: str
    blocks: tuple[str, ...]
    sample_input: str


SAMPLE_WORKFLOWS: dict[str, SampleWorkflow] = {
    workflow.key: workflow
    for workflow in (
        SampleWorkflow(
            key="content-pipeline",
            name="Content Pipeline",
            blocks=("summarizeText", "extractKeyPoints"),
            sample_input=(
                "Artificial intelligence has transformed the way we interact with technology in "
                "our daily lives. From voice assistants like Siri and Alexa to recommendation "
                "systems on Netflix and Spotify, AI is everywhere. Machine learning algorithms "
                "analyze vast amounts of data to identify patterns and make predictions, "
                "enabling personalized experiences for users. Natural language processing "
                "allows computers to understand and generate human language, making chatbots "
                "and virtual assistants more conversational and helpful."
            ),
        ),
        SampleWorkflow(
            key="communication-pipeline",
            name="Communication Pipeline",
            blocks=("improveWritingQuality", "rewriteAsEmail"),
            sample_input=(
                "The company are planning to launch there new product next month but their "
                "still working on final testing. Its been a long development process with many "
                "challenge but the team is very excited about the results."
            ),
        ),
        SampleWorkflow(
            key="multilingual-workflow",
            name="Multilingual Workflow",
            blocks=("summarizeText", "translateText"),
            sample_input=(
                "Welcome to our platform! We are excited to have you here. Our mission is to "
                "make technology accessible to everyone. Whether you are a beginner or an "
                "expert, we have tools and resources to help you succeed. Please explore our "
                "features and let us know if you have any questions."
            ),
        ),
        SampleWorkflow(
            key="data-extraction",
            name="Data Extraction",
            blocks=("extractKeyPoints", "convertToTable"),
            sample_input=(
                "In our quarterly meeting, we discussed several important topics. First, the "
                "sales team reported a 15% increase in revenue compared to last quarter. Second, "
                "the product team announced the upcoming launch of three new features. Third, "
                "we reviewed the customer satisfaction scores which showed improvement in "
                "support response times."
            ),
        ),
    )
}


def get_sample_data(registry: BlockRegistry, block_id: str) -> str:
    """Return the sample input for ``block_id``, or an empty string."""

    block = registry.get_block(block_id)
    return block.sample_input if block is not None else ""


def get_sample_workflow(key: str) -> SampleWorkflow | None:
    return SAMPLE_WORKFLOWS.get(key)
