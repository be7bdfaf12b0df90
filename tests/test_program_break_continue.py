from basil.interpreter import Interpreter
from basil.parser import parse_program


def test_program_break_continue(capsys, examples_dir):
    with open(examples_dir / 'break_continue.bas', 'r', encoding='utf-8') as f:
        source = f.read()
    program = parse_program(source)
    interp = Interpreter()
    interp.run(program)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # i == 2 is skipped by CONTINUE, the loop ends by BREAK once i > 4
    assert out_lines == ['i=1', 'i=3', 'i=4', 'done at 5']


def test_program_nested_loops(capsys, examples_dir):
    with open(examples_dir / 'nested_loops.bas', 'r', encoding='utf-8') as f:
        source = f.read()
    program = parse_program(source)
    interp = Interpreter()
    interp.run(program)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['*', '**', '***']
