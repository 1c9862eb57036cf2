# Mnemonics and operand counts
MOV = 'mov'     # R1 <- R2 | C2
ADD = 'add'     # R1 <- R1 + R2 (wrapping)
JNZ = 'jnz'     # if R1 | C1 .ne 0: pc += R2 | C2
PRINT = 'print'  # emit chr(R1)

ARITY = {
    MOV: 2,
    ADD: 2,
    JNZ: 2,
    PRINT: 1
}
