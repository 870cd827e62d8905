''' Instruction line grammar '''

import pyparsing as pp


def g_int(name: str):
    return pp.Regex(r'[+-]?[0-9]+\b').set_parse_action(lambda r: int(r[0]))(name)


index = g_int('index')
opcode = pp.Word(pp.alphas + '_', pp.alphanums + '_')('name')
argument = g_int('arg')

# <index> <OPCODE> [<argument>]
instruction = index + opcode + pp.Optional(argument)
