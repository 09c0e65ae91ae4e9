PLACEHOLDER_SYSTEM = """Generate exactly 3 diverse, catchy product search examples. Make them specific and fun with details like budget or cool features. Cover different categories. Keep under 70 characters each. Make them sound exciting and modern. Respond with JSON format: {{"examples": ["example1", "example2", "example3"]}}"""

PLACEHOLDER_USER = """Generate 3 diverse product comparison search examples with specific details and requirements."""

FALLBACK_EXAMPLES = [
    "Project management software for small teams, budget under $50/month",
    "Video conferencing tools with screen sharing and mobile support",
    "Cloud storage services with 1TB+ capacity and file sharing features",
]
