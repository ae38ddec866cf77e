"""Top-level configuration of the topology viewer."""

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated, final

from .shared import DiagramConfig, FormConfig


@final
class TopologyViewerConfig(BaseModel):
    """Everything the hosting UI can tune about the viewer."""

    diagram: Annotated[DiagramConfig, Field(default_factory=lambda: DiagramConfig())]
    """
    Configuration of the Mermaid diagram
    """

    form: Annotated[FormConfig, Field(default_factory=lambda: FormConfig())]
    """
    Configuration of the message composer form
    """

    # pydantic config
    model_config = ConfigDict(revalidate_instances='always')
