"""Window-manager command grammar.

A subset of the command language tiling window managers accept on key
bindings and over IPC, e.g.:

    [class="Firefox" title="Mail"] move workspace 2; workspace next, kill
"""

from __future__ import annotations

from functools import cache

from cmdlang.core.grammar import INITIAL, GrammarBuilder, GrammarTable

DIRECTIONS = ("left", "right", "up", "down")
CRITERIA = ("class", "instance", "window_role", "con_id", "id", "con_mark", "title")


@cache
def window_manager_grammar() -> GrammarTable:
    """Build the grammar once; the table is immutable and shared."""

    g = GrammarBuilder()

    (
        g.state(INITIAL)
        .end()
        .literal("[", goto="CRITERIA")
        .literal("move", goto="MOVE")
        .literal("exec", goto="EXEC")
        .literal("exit", call=g.call("cmd_exit"))
        .literal("restart", call=g.call("cmd_restart"))
        .literal("reload", call=g.call("cmd_reload"))
        .literal("border", goto="BORDER")
        .literal("workspace", goto="WORKSPACE")
        .literal("focus", goto="FOCUS")
        .literal("kill", goto="KILL")
        .literal("fullscreen", call=g.call("cmd_fullscreen"))
        .literal("mark", goto="MARK")
        .literal("nop", goto="NOP")
    )

    # criteria are accumulated by the match context; ']' applies them
    g.state("CRITERIA").literal(*CRITERIA, capture="ctype", goto="CRITERION").literal(
        "]", call=g.call("cmd_criteria_match_windows")
    )
    g.state("CRITERION").literal("=", goto="CRITERION_STR")
    g.state("CRITERION_STR").word(capture="cvalue", call=g.call("cmd_criteria_add", next_state="CRITERIA"))

    (
        g.state("MOVE")
        .literal("window", "container")
        .literal(*DIRECTIONS, capture="direction", goto="MOVE_DIRECTION")
        .literal("workspace", goto="MOVE_WORKSPACE")
    )
    (
        g.state("MOVE_DIRECTION")
        .word(capture="pixels", goto="MOVE_DIRECTION_PX")
        .end(call=g.call("cmd_move_direction"))
    )
    g.state("MOVE_DIRECTION_PX").literal("px").end(call=g.call("cmd_move_direction"))
    (
        g.state("MOVE_WORKSPACE")
        .literal("next", "prev", capture="direction", call=g.call("cmd_move_con_to_workspace"))
        .string(capture="workspace", call=g.call("cmd_move_con_to_workspace_name"))
    )

    exec_call = g.call("cmd_exec")
    g.state("EXEC").literal("--no-startup-id", capture="nosn", goto="EXEC_COMMAND").string(capture="command", call=exec_call)
    g.state("EXEC_COMMAND").string(capture="command", call=exec_call)

    g.state("BORDER").literal("normal", "none", "1pixel", "toggle", capture="border_style", call=g.call("cmd_border"))

    (
        g.state("WORKSPACE")
        .literal("next_on_output", "prev_on_output", "next", "prev", capture="direction", call=g.call("cmd_workspace"))
        .literal("back_and_forth", call=g.call("cmd_workspace_back_and_forth"))
        .string(capture="workspace", call=g.call("cmd_workspace_name"))
    )

    (
        g.state("FOCUS")
        .literal(*DIRECTIONS, capture="direction", call=g.call("cmd_focus_direction"))
        .literal("parent", "child", capture="level", call=g.call("cmd_focus_level"))
        .end(call=g.call("cmd_focus"))
    )

    (
        g.state("KILL")
        .literal("window", "client", capture="kill_mode", call=g.call("cmd_kill"))
        .end(call=g.call("cmd_kill"))
    )

    g.state("MARK").string(capture="mark", call=g.call("cmd_mark"))

    g.state("NOP").string(capture="comment", call=g.call("cmd_nop")).end(call=g.call("cmd_nop"))

    return g.build()
