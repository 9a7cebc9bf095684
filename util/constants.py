class InternalURIs:
    ROOT = "/"
    HEALTH = "/health"
    MCP = "/mcp"
    API = "/api"
    V1 = API + "/v1"
    TOOLS = V1 + "/tools"
    TOOL_CALL = TOOLS + "/{tool_name}"
