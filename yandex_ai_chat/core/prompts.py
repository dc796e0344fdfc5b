"""Fixed prompt templates used by the orchestrator."""

REFACTOR_TEMPLATE = "Refactor and optimize the following code:\n\n{prompt}"

# Cascade stages 2-4
OPTIMIZE_TEMPLATE = "Optimize the following code for performance and best practices:\n\n{code}"
DOCUMENT_TEMPLATE = "Add comprehensive documentation comments to the following code:\n\n{code}"
SECURITY_TEMPLATE = "Analyze the following code for security vulnerabilities:\n\n{code}"

UML_DIAGRAM_TEMPLATE = (
    "Create a professional {diagram_type} UML diagram for the following code. "
    "Use a clean, minimalistic black-and-white style. "
    "Show classes, methods, attributes, and relationships clearly.\n\n"
    "Code:\n{code}"
)
UML_DIAGRAM_SIZE = (800, 600)

UI_MOCKUP_TEMPLATE = (
    "Create a modern application UI design based on this description: {description}. "
    "Use Material Design style. Clean layout with blue, white, and gray colors."
)
UI_MOCKUP_SIZE = (1200, 800)


def uml_diagram_prompt(code: str, diagram_type: str = "class") -> str:
    return UML_DIAGRAM_TEMPLATE.format(diagram_type=diagram_type, code=code)


def ui_mockup_prompt(description: str) -> str:
    return UI_MOCKUP_TEMPLATE.format(description=description)
