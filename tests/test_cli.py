'''
Command line interface tests
'''

from rpncalc.cli import CLI


def test_expressions(capsys):
    machine = CLI().run(args=['-e', '3', '4', '+'])
    assert machine.stack == [7.0]
    assert capsys.readouterr().out == '0: 7\n'


def test_expression_line(capsys):
    CLI().run(args=['-e', '3 4+ 2 *', '-1.5'])
    assert capsys.readouterr().out == '0: 14\n1: -1.5\n'


def test_verbose(capsys):
    CLI().run(args=['-v', '-e', '2 3 ^'])
    assert capsys.readouterr().out.splitlines() == [
        'Pushed 2',
        'Pushed 3',
        '2 ^ 3 = 8',
        '0: 8',
    ]


def test_failed_operation_keeps_stack(capsys):
    CLI().run(args=['-e', '5 0 /'])
    assert capsys.readouterr().out == '0: 5\n1: 0\n'


def test_lex_error_aborts_line(capsys):
    CLI().run(args=['-e', '1 $ 2', '3'])
    captured = capsys.readouterr()
    assert captured.out == '0: 1\n1: 3\n'
    assert "Couldn't lex $ 2" in captured.err


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '3 sin +'])
    assert capsys.readouterr().out.splitlines() == [
        '[groups]\t<repr(lexeme)>\t<operation>',
        "number\t'3'\t",
        "word\t'sin'\tSIN",
        "operator\t'+'\tADD",
    ]


def test_raw_grammar(capsys):
    CLI().run(args=['-G', '-e'])
    assert '(?<number>' in capsys.readouterr().out


def test_non_ascii_digits_rejected(capsys):
    machine = CLI().run(args=['-e', '٣ ٤ +'])
    captured = capsys.readouterr()
    assert machine.stack == []
    assert captured.out == ''
    assert "Couldn't lex ٣ ٤ +" in captured.err
