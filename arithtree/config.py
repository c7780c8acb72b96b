from pydantic import BaseModel


class DemoConfig(BaseModel):
    # Flat infix text that is parsed, computed, saved and loaded again
    expression: str = "1+2*3-4"
    # Serialized text that is loaded directly
    serialized: str = "Op + Constant 3 Constant 4"
    # Print the indented tree form of the parsed expression
    show_tree: bool = False
    # Enable debug logging for the loader registry
    verbose: bool = False
