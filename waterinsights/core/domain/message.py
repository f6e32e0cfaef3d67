"""
Message Domain Models - Parameterized recommendation templates and the scored
results produced by resolvers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from waterinsights.core.domain.enums import DeviceType


class RecommendationTemplate(str, Enum):
    """Display templates a message can be rendered with."""

    INSIGHT_A1_DAYOFWEEK_CONSUMPTION_INCR = "INSIGHT_A1_DAYOFWEEK_CONSUMPTION_INCR"
    INSIGHT_A1_DAYOFWEEK_CONSUMPTION_DECR = "INSIGHT_A1_DAYOFWEEK_CONSUMPTION_DECR"


class ParameterizedTemplate(BaseModel, ABC):
    """
    A template selection plus the parameters needed to render it.

    Subclasses add their own values and decide which template applies.
    """

    model_config = ConfigDict(frozen=True)

    ref_date: datetime
    device_type: DeviceType

    @property
    @abstractmethod
    def template(self) -> RecommendationTemplate:
        ...

    @property
    def parameters(self) -> dict[str, Any]:
        """
        Locale-independent parameter map for rendering.

        Subclasses extend the common entries returned here.
        """
        return {
            "ref_date": self.ref_date,
            "device_type": self.device_type,
        }

    @abstractmethod
    def with_locale(self, locale: str, currency_rate: Any = None) -> "ParameterizedTemplate":
        """
        Adapt the parameters to a target locale.

        Args:
            locale: Target locale (e.g. "en", "el")
            currency_rate: Optional currency conversion collaborator

        Returns:
            A template whose values are suitable for the locale
        """
        ...


@dataclass(frozen=True)
class MessageResolutionStatus:
    """A candidate message with the confidence score it was produced with."""

    score: float
    template: ParameterizedTemplate
