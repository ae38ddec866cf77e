"""Configuration types shared by the diagram renderer and the form bridge."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from typing_extensions import Annotated

DiagramOrientation = Literal['LR', 'RL', 'TB', 'TD', 'BT']
"""Direction of the Mermaid flowchart."""


class DiagramConfig(BaseModel):
    """Configuration for rendering the aggregated topology as a Mermaid diagram."""

    orientation: DiagramOrientation = 'LR'
    """
    Layout direction of the graph (default: LR, producers on the left, consumers on the right)
    """

    include_styles: bool = False
    """
    If True, topic labels include producer/consumer counts and class definitions are appended to the diagram

    (default: False)
    """

    hot_topic_threshold: PositiveInt = 4
    """
    Topics with at least this many connections (producers + consumers) are styled as "hot" (default: 4)

    Only used if include_styles is True.
    """

    service_icon: str = '📦'
    """
    Prefix of every service label
    """

    topic_icon: str = '💬'
    """
    Prefix of every topic label
    """

    # pydantic config
    model_config = ConfigDict(revalidate_instances='always')


class FormConfig(BaseModel):
    """Configuration for converting example payloads into form display values."""

    array_separator: Annotated[str, Field(min_length=1, pattern=r'^,\s*$')] = ', '
    """
    Separator used when an example array is shown in a comma-separated control (default: ', ')

    The separator must start with a comma, as values are split on commas when the form is collected.
    """

    json_indent: Annotated[int, Field(ge=0, le=8)] = 2
    """
    Indentation used when an example object is shown as JSON text (default: 2)
    """

    # pydantic config
    model_config = ConfigDict(revalidate_instances='always')
