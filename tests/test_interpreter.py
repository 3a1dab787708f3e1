import pytest

from linea.ast import Program, PrintStatement, BinaryArith, NumberLiteral, ArithOp
from linea.errors import LineaRuntimeError, RuntimeErrorKind
from linea.interpreter import (
    Interpreter, evaluate, run_program, parse_program, MAX_LOOP_ITERATIONS,
)


def run(source):
    printed = []
    run_program(source, print_sink=printed.append)
    return printed


def run_failing(source):
    printed = []
    with pytest.raises(LineaRuntimeError) as exc_info:
        run_program(source, print_sink=printed.append)
    return exc_info.value, printed


def test_arithmetic_precedence():
    assert run('print(2+3*4); print((2+3)*4);') == [14, 20]


def test_true_division():
    assert run('print(7 / 2); print(-8 / 4);') == [3.5, -2.0]


@pytest.mark.parametrize('source', [
    'print(1 / 0);',
    'let x = 3; print(x / (2 - 2));',
    'print(1 / 0.0);',
])
def test_division_by_zero(source):
    err, printed = run_failing(source)
    assert err.kind == RuntimeErrorKind.DIVISION_BY_ZERO
    assert printed == []


def test_prints_arrive_in_source_order():
    assert run('print(1); print("two"); print(1 + 2); print(2 * 2);') == [1, 'two', 3, 4]


def test_false_if_without_else_prints_nothing():
    assert run('if 1 > 2 then print("no");') == []
    assert run('if 1 > 2 then print("no"); else print("yes");') == ['yes']


def test_comparisons():
    source = '''
        if 1 == 1 print("eq");
        if 1 != 2 print("neq");
        if 2 <= 2 print("le");
        if 3 >= 4 print("ge");
        if "a" < "b" print("lt");
        if "x" == 1 print("mixed");
    '''
    assert run(source) == ['eq', 'neq', 'le', 'lt']


def test_endless_loop_stops_after_the_limit():
    err, printed = run_failing('let i = 0; while 0 < 1 do { print(i); i = i + 1; }')
    assert err.kind == RuntimeErrorKind.ITERATION_LIMIT_EXCEEDED
    assert len(printed) == MAX_LOOP_ITERATIONS == 1000
    assert printed[-1] == 999


def test_loop_may_run_exactly_the_limit():
    assert run('let i = 0; while i < 1000 do i = i + 1; print(i);') == [1000]


def test_loop_limit_is_per_loop_statement():
    source = '''
        let i = 0;
        while i < 600 do i = i + 1;
        let i = 0;
        while i < 600 do i = i + 1;
        print(i);
    '''
    assert run(source) == [600]


def test_while_example_terminates_normally():
    assert run('let x = 5; while x < 8 do { print(x); x = x + 1; }') == [5, 6, 7]


def test_function_call_end_to_end():
    assert run('func sum(a, b) { return a + b; } print(sum(2, 3));') == [5]


def test_arity_mismatch_names_both_counts():
    err, _ = run_failing('func sum(a, b) { return a + b; } print(sum(1, 2, 3));')
    assert err.kind == RuntimeErrorKind.ARITY_MISMATCH
    assert (err.name, err.expected, err.actual) == ('sum', 2, 3)
    assert 'expects 2 arguments, got 3' in str(err)


def test_undefined_function():
    err, _ = run_failing('print(nope(1));')
    assert err.kind == RuntimeErrorKind.UNDEFINED_FUNCTION
    assert err.name == 'nope'


def test_undefined_variable():
    err, printed = run_failing('print(1); print(y);')
    assert err.kind == RuntimeErrorKind.UNDEFINED_VARIABLE
    assert err.name == 'y'
    assert printed == [1]


def test_return_escapes_nested_blocks():
    source = '''
        func first_over(limit) {
            let i = 0;
            while i < 10 do {
                if i > limit then {
                    return i;
                }
                i = i + 1;
            }
            return 99;
        }
        print(first_over(3));
        print(first_over(20));
    '''
    assert run(source) == [4, 99]


def test_call_without_return_has_no_value():
    assert run('func noop() { let z = 1; } print(noop());') == [None]


def test_top_level_return_stops_the_program():
    printed = []
    value = evaluate(parse_program('print(1); return 2; print(3);'), printed.append)
    assert value == 2
    assert printed == [1]


def test_callee_cannot_see_caller_locals():
    source = '''
        func inner() { return secret; }
        func outer(secret) { return inner(); }
        print(outer(1));
    '''
    err, _ = run_failing(source)
    assert err.kind == RuntimeErrorKind.UNDEFINED_VARIABLE
    assert err.name == 'secret'


def test_parameters_shadow_globals_and_assignment_stays_local():
    source = '''
        let x = 10;
        func bump(x) { x = x + 1; return x; }
        print(bump(1));
        print(x);
    '''
    assert run(source) == [2, 10]


def test_assignment_inside_function_writes_globals():
    source = '''
        let count = 0;
        func tick() { count = count + 1; return count; }
        tick(); tick();
        print(count);
    '''
    assert run(source) == [2]


def test_arguments_are_evaluated_in_the_callers_frame():
    source = '''
        func add1(x) { return x + 1; }
        func twice_plus_one(x) { return add1(x * 2); }
        print(twice_plus_one(5));
    '''
    assert run(source) == [11]


def test_assignment_is_an_expression():
    assert run('let a = 0; let b = a = 5; print(a); print(b);') == [5, 5]


def test_later_declaration_replaces_function():
    assert run('func f() return 1; func f() return 2; print(f());') == [2]


def test_string_concatenation():
    assert run('let n = 3; print("n=" + n); print(1.5 + "x");') == ['n=3', '1.5x']


@pytest.mark.parametrize('source', [
    'print("a" * 2);',
    'print("a" - "b");',
    'if "a" < 1 print(1);',
    'func f() { let q = 0; } print(f() + 1);',
])
def test_type_mismatch(source):
    err, _ = run_failing(source)
    assert err.kind == RuntimeErrorKind.TYPE_MISMATCH


def test_runaway_recursion_is_stopped():
    err, _ = run_failing('func down(n) { return down(n + 1); } down(0);')
    assert err.kind == RuntimeErrorKind.RECURSION_LIMIT_EXCEEDED
    assert err.name == 'down'


def test_environment_is_fresh_per_interpreter():
    program = parse_program('let x = 1; func f() return 1;')
    first = Interpreter(print_sink=lambda v: None)
    first.run(program)
    assert first.env.globals == {'x': 1}
    assert 'f' in first.env.functions
    second = Interpreter(print_sink=lambda v: None)
    assert second.env.globals == {}
    assert second.env.frames == []


def test_default_sink_writes_formatted_values(capsys):
    run_program('print(4 / 2); print("s"); print(0.25);')
    assert capsys.readouterr().out == '2\ns\n0.25\n'


def test_debug_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(print_sink=lambda v: None, debug_level=3, debug_file=str(debug_file))
    interp.run(parse_program('func f(a) return a; let x = f(2); if x > 1 print(x);'))
    log = debug_file.read_text(encoding='utf-8')
    assert 'define function f(a)' in log
    assert 'call f(2)' in log
    assert 'declare x: Number = 2' in log
    assert 'if condition -> true' in log


@pytest.mark.parametrize('source', [
    'let x = 10; let i = 0; while i < 9 do { x = x * x; i = i + 1; } print(x / 3);',
    'let f = 10.5; let i = 0; while i < 12 do { f = f * f; i = i + 1; } print(f);',
    'print(1 / 0.' + '0' * 320 + '1);',
])
def test_numeric_overflow(source):
    err, printed = run_failing(source)
    assert err.kind == RuntimeErrorKind.NUMERIC_OVERFLOW
    assert printed == []


def test_large_numbers_within_range():
    assert run('print(1000000000000000000000 * 1000000000000000000000 / 2);') == [5e41]


def test_deeply_nested_tree_is_a_runtime_error():
    expr = NumberLiteral(1)
    for _ in range(20000):
        expr = BinaryArith(ArithOp.ADD, expr, NumberLiteral(1))
    with pytest.raises(LineaRuntimeError) as exc_info:
        evaluate(Program((PrintStatement(expr),)), print_sink=lambda v: None)
    assert exc_info.value.kind == RuntimeErrorKind.RECURSION_LIMIT_EXCEEDED
