FEATURE_SYSTEM = """You rewrite comparison-table feature names so shoppers can read them.
Turn camelCase, snake_case and abbreviations into short Title Case labels ("batteryLife" -> "Battery Life", "ram_gb" -> "RAM (GB)").
Keep labels that are already readable unchanged. Respond with a JSON object: {{"labels": {{"<original>": "<readable label>"}}}} covering every input name."""

FEATURE_USER_TEMPLATE = """Feature names:
{features}"""
