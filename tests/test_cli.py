import json

from padelmatch.testing.__main__ import COMMANDS, create_completer, create_main_parser


def test_tournament_subcommand(capsys):
    args = create_main_parser().parse_args(
        ["tournament", "--players", "8", "--type", "round-robin", "--seed", "4"]
    )
    assert args.func(args) == 0

    out = capsys.readouterr().out
    assert "round-robin" in out
    assert "Standings:" in out


def test_sessions_subcommand_writes_json(tmp_path, capsys):
    output = tmp_path / "sessions.json"
    args = create_main_parser().parse_args(
        ["sessions", "--players", "8", "--sessions", "2", "--seed", "1", "--output", str(output)]
    )
    assert args.func(args) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert len(payload["sessions"]) == 2
    assert "Leaderboard:" in capsys.readouterr().out


def test_completer_knows_every_command():
    completer = create_completer()
    for command in COMMANDS:
        assert command in completer.options
        assert f"/{command}" in completer.options
