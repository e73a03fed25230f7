# noqa
from reflection_guidance.services.guidance_response_service import (
    GuidanceResponseService,
    get_guidance_response_service,
)

__all__ = ["GuidanceResponseService", "get_guidance_response_service"]
