"""DE ASCII file layer: header parsing, segment/record access, Chebyshev evaluation.

Data flow
---------
header.NNN is parsed once into a Header (coefficient layout and constants).
For each epoch the ChunkStore picks the ascpYYYY.NNN file whose year range
holds the epoch, indexes its records by byte offset, and loads the single
record (Chunk) covering the epoch. interpolate() then evaluates one element
of that record.
"""
