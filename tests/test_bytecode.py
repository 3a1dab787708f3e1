from linea.bytecode import emit_bytecode, emit_instructions, Instruction
from linea.parser import parse_program


def listing(source):
    return emit_bytecode(parse_program(source))


def test_declaration_and_arithmetic():
    assert listing('let x = 1 + 2 * y;') == [
        'PUSH 1', 'PUSH 2', 'LOAD y', 'MUL', 'ADD', 'STORE x',
    ]


def test_literals_calls_and_print():
    assert listing('print(f("hi", -2.5));') == [
        'PUSH "hi"', 'PUSH -2.5', 'CALL f 2', 'CALL print 1',
    ]


def test_assignment_expression_statement():
    assert listing('a = b = 4 / c;') == [
        'PUSH 4', 'LOAD c', 'DIV', 'STORE b', 'STORE a',
    ]


def test_if_without_else():
    assert listing('if x == 1 then print(x);') == [
        'LOAD x', 'PUSH 1', 'COMPARE ==', 'JUMP_IF_FALSE end',
        'LOAD x', 'CALL print 1',
        'LABEL end',
    ]


def test_if_with_else():
    assert listing('if x > 1 print(1); else print(2);') == [
        'LOAD x', 'PUSH 1', 'COMPARE >', 'JUMP_IF_FALSE else',
        'PUSH 1', 'CALL print 1',
        'JUMP end',
        'LABEL else',
        'PUSH 2', 'CALL print 1',
        'LABEL end',
    ]


def test_while_loop():
    assert listing('let x = 5; while x < 8 do { print(x); x = x + 1; }') == [
        'PUSH 5', 'STORE x',
        'LABEL loop_start',
        'LOAD x', 'PUSH 8', 'COMPARE <', 'JUMP_IF_FALSE loop_end',
        'LOAD x', 'CALL print 1',
        'LOAD x', 'PUSH 1', 'ADD', 'STORE x',
        'JUMP loop_start',
        'LABEL loop_end',
    ]


def test_function_with_explicit_return():
    assert listing('func sum(a, b) { return a + b; }') == [
        'FUNCTION sum', 'PARAM a', 'PARAM b',
        'LOAD a', 'LOAD b', 'ADD', 'RETURN',
    ]


def test_function_falling_off_the_end_gets_a_return():
    assert listing('func hello() { print("hello"); }') == [
        'FUNCTION hello', 'PUSH "hello"', 'CALL print 1', 'RETURN',
    ]
    assert listing('func empty() { }') == ['FUNCTION empty', 'RETURN']


def test_nested_constructs_reuse_label_names():
    lines = listing('if a < 1 then { if b < 2 then print(1); } while c < 3 do { while d < 4 do d = d + 1; }')
    assert lines.count('LABEL end') == 2
    assert lines.count('JUMP_IF_FALSE end') == 2
    assert lines.count('LABEL loop_start') == 2
    assert lines.count('LABEL loop_end') == 2


def test_emission_does_not_evaluate():
    # would fail at runtime; the listing is still produced
    assert listing('print(1 / 0);') == ['PUSH 1', 'PUSH 0', 'DIV', 'CALL print 1']


def test_instruction_objects():
    instructions = emit_instructions(parse_program('return x;'))
    assert instructions == [Instruction('LOAD', 'x'), Instruction('RETURN')]
    assert str(instructions[1]) == 'RETURN'
