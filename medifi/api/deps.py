from fastapi import Request
from medifi.platform.registry import PlatformRegistry

def get_platform(request: Request) -> PlatformRegistry:
    return request.app.state.platform
