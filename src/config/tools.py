# Store for tools configuration
TOOLS = [
    {
        "id": "unit-converter",
        "name": "Unit Converter",
        "description": "Convert between units of length, weight, temperature, speed, and storage",
        "category": "converters",
        "path": "/api/units/convert",
        "tags": ["units", "length", "weight", "temperature", "speed", "storage"],
        "has_history": True,
        "icon": "📏"
    },
    {
        "id": "json-converter",
        "name": "JSON-YAML-XML Converter",
        "description": "Convert between JSON, YAML, and XML formats with validation",
        "category": "converters",
        "path": "/api/convert",
        "tags": ["converter", "json", "yaml", "xml", "format"],
        "has_history": True,
        "icon": "🔄"
    },
]


def get_tool(tool_id):
    """Return the catalog entry for tool_id, or None."""
    for tool in TOOLS:
        if tool["id"] == tool_id:
            return tool
    return None
