"""JSON serialization/deserialization for CORE syntax trees.

This module converts between the syntax tree dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes a dict
tagged with ``"type"`` and keeps its source line.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    DeclList,
    Decl,
    StmtList,
    Assign,
    IfStmt,
    WhileStmt,
    ReadStmt,
    WriteStmt,
    TermExp,
    PlusExp,
    MinusExp,
    FactorTerm,
    MulTerm,
    NumberFactor,
    IdentFactor,
    ParenFactor,
    CompCond,
    NotCond,
    AndCond,
    OrCond,
    Comparison,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {
            "type": "Program",
            "decls": ast_to_obj(node.decls),
            "stmts": ast_to_obj(node.stmts),
            "line": node.line,
        }
    if isinstance(node, DeclList):
        return {"type": "DeclList", "decls": [ast_to_obj(d) for d in node.decls], "line": node.line}
    if isinstance(node, Decl):
        return {"type": "Decl", "names": list(node.names), "line": node.line}
    if isinstance(node, StmtList):
        return {
            "type": "StmtList",
            "statements": [ast_to_obj(s) for s in node.statements],
            "line": node.line,
        }

    # Statements
    if isinstance(node, Assign):
        return {"type": "Assign", "target": node.target, "exp": ast_to_obj(node.exp), "line": node.line}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_body": ast_to_obj(node.then_body),
            "else_body": ast_to_obj(node.else_body),
            "line": node.line,
        }
    if isinstance(node, WhileStmt):
        return {
            "type": "WhileStmt",
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
            "line": node.line,
        }
    if isinstance(node, ReadStmt):
        return {"type": "ReadStmt", "names": list(node.names), "line": node.line}
    if isinstance(node, WriteStmt):
        return {"type": "WriteStmt", "names": list(node.names), "line": node.line}

    # Expressions
    if isinstance(node, TermExp):
        return {"type": "TermExp", "term": ast_to_obj(node.term), "line": node.line}
    if isinstance(node, PlusExp):
        return {"type": "PlusExp", "term": ast_to_obj(node.term), "exp": ast_to_obj(node.exp), "line": node.line}
    if isinstance(node, MinusExp):
        return {"type": "MinusExp", "term": ast_to_obj(node.term), "exp": ast_to_obj(node.exp), "line": node.line}
    if isinstance(node, FactorTerm):
        return {"type": "FactorTerm", "factor": ast_to_obj(node.factor), "line": node.line}
    if isinstance(node, MulTerm):
        return {
            "type": "MulTerm",
            "factor": ast_to_obj(node.factor),
            "term": ast_to_obj(node.term),
            "line": node.line,
        }
    if isinstance(node, NumberFactor):
        return {"type": "NumberFactor", "value": node.value, "line": node.line}
    if isinstance(node, IdentFactor):
        return {"type": "IdentFactor", "name": node.name, "line": node.line}
    if isinstance(node, ParenFactor):
        return {"type": "ParenFactor", "exp": ast_to_obj(node.exp), "line": node.line}

    # Conditions
    if isinstance(node, Comparison):
        return {
            "type": "Comparison",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
        }
    if isinstance(node, CompCond):
        return {"type": "CompCond", "comparison": ast_to_obj(node.comparison), "line": node.line}
    if isinstance(node, NotCond):
        return {"type": "NotCond", "cond": ast_to_obj(node.cond), "line": node.line}
    if isinstance(node, AndCond):
        return {"type": "AndCond", "left": ast_to_obj(node.left), "right": ast_to_obj(node.right), "line": node.line}
    if isinstance(node, OrCond):
        return {"type": "OrCond", "left": ast_to_obj(node.left), "right": ast_to_obj(node.right), "line": node.line}

    raise TypeError(f"Unsupported node type for JSON: {type(node)}")


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if not isinstance(o, dict) or "type" not in o:
        raise ValueError(f"Invalid AST object: {o!r}")

    t = o["type"]
    line = o.get("line", 0)

    if t == "Program":
        return Program(ast_from_obj(o["decls"]), ast_from_obj(o["stmts"]), line)
    if t == "DeclList":
        return DeclList([ast_from_obj(d) for d in o["decls"]], line)
    if t == "Decl":
        return Decl(list(o["names"]), line)
    if t == "StmtList":
        return StmtList([ast_from_obj(s) for s in o["statements"]], line)

    if t == "Assign":
        return Assign(o["target"], ast_from_obj(o["exp"]), line)
    if t == "IfStmt":
        return IfStmt(
            ast_from_obj(o["condition"]),
            ast_from_obj(o["then_body"]),
            ast_from_obj(o.get("else_body")),
            line,
        )
    if t == "WhileStmt":
        return WhileStmt(ast_from_obj(o["condition"]), ast_from_obj(o["body"]), line)
    if t == "ReadStmt":
        return ReadStmt(list(o["names"]), line)
    if t == "WriteStmt":
        return WriteStmt(list(o["names"]), line)

    if t == "TermExp":
        return TermExp(ast_from_obj(o["term"]), line)
    if t == "PlusExp":
        return PlusExp(ast_from_obj(o["term"]), ast_from_obj(o["exp"]), line)
    if t == "MinusExp":
        return MinusExp(ast_from_obj(o["term"]), ast_from_obj(o["exp"]), line)
    if t == "FactorTerm":
        return FactorTerm(ast_from_obj(o["factor"]), line)
    if t == "MulTerm":
        return MulTerm(ast_from_obj(o["factor"]), ast_from_obj(o["term"]), line)
    if t == "NumberFactor":
        return NumberFactor(int(o["value"]), line)
    if t == "IdentFactor":
        return IdentFactor(o["name"], line)
    if t == "ParenFactor":
        return ParenFactor(ast_from_obj(o["exp"]), line)

    if t == "Comparison":
        return Comparison(o["op"], ast_from_obj(o["left"]), ast_from_obj(o["right"]), line)
    if t == "CompCond":
        return CompCond(ast_from_obj(o["comparison"]), line)
    if t == "NotCond":
        return NotCond(ast_from_obj(o["cond"]), line)
    if t == "AndCond":
        return AndCond(ast_from_obj(o["left"]), ast_from_obj(o["right"]), line)
    if t == "OrCond":
        return OrCond(ast_from_obj(o["left"]), ast_from_obj(o["right"]), line)

    raise ValueError(f"Unknown AST node type: {t}")
