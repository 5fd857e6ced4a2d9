"""Step-wise Simon engine.

The engine is built bottom-up: `config` holds the constants of each
instance, `lfsr` and `sequence` generate the round constants,
`keyschedule` and `roundstep` are the pure step functions, `control`
sequences them in a state machine and `front` exposes the
request/response interface.

"""
