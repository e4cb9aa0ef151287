from enum import Enum


class NodeKind(str, Enum):
    """The tree-sitter node types the transforms dispatch on."""

    PROGRAM = "program"
    STATEMENT_BLOCK = "statement_block"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    EXPORT_STATEMENT = "export_statement"
    AWAIT_EXPRESSION = "await_expression"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    OBJECT = "object"
    PAIR = "pair"
    SHORTHAND_PROPERTY = "shorthand_property_identifier"
    SPREAD_ELEMENT = "spread_element"
    METHOD_DEFINITION = "method_definition"
    STRING = "string"
    NUMBER = "number"
    COMPUTED_PROPERTY_NAME = "computed_property_name"
    TEMPLATE_STRING = "template_string"
    COMMENT = "comment"

    @classmethod
    def of(cls, node) -> "NodeKind | None":
        try:
            return cls(node.type)
        except ValueError:
            return None


# Statement lists that accept a sibling statement after a declaration.
STATEMENT_CONTAINERS = frozenset({NodeKind.PROGRAM, NodeKind.STATEMENT_BLOCK})

DECLARATION_KINDS = frozenset(
    {NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION}
)
