# topmark:header:start
#
#   project      : RppChunk
#   file         : chunks_rppchunk.py
#   file_relpath : tests/chunks_rppchunk.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sample chunks shared by the test modules.

The chunks follow the layout produced by the host's state chunk API: one
element per ``<NAME`` line, closed by a lone ``>``, no indentation.
"""

from __future__ import annotations

TRACK_CHUNK: str = """\
<TRACK
NAME "Lead vocals"
MUTESOLO 0 0 0
TRACKID {11111111-2222-3333-4444-555555555555}
<FXCHAIN
SHOW 0
BYPASS 0 0 0
<VST "VST: ReaEQ (Cockos)" reaeq.dll 0 "" 1919247729
ZXE=
AAAAAQAAAA==
>
FXID {AAAAAAAA-0000-0000-0000-000000000001}
BYPASS 1 0 0
<VST "VST: ReaComp (Cockos)" reacomp.dll 0 "" 1919247729
BBBBAQAAAA==
>
FXID {AAAAAAAA-0000-0000-0000-000000000002}
BYPASS 0 0 0
<JS loser/3BandEQ ""
0 200 0 2000 0 0
>
FXID {AAAAAAAA-0000-0000-0000-000000000003}
>
<ITEM
POSITION 1.5
<SOURCE MIDI
HASDATA 1 960 QN
E 0 90 3c 60
E 480 80 3c 00
GUID {BBBBBBBB-0000-0000-0000-000000000001}
>
>
>
"""

FXCHAIN_TEXT: str = TRACK_CHUNK[
    TRACK_CHUNK.index("<FXCHAIN") : TRACK_CHUNK.index("<ITEM")
]

SECOND_VST_TEXT: str = """\
<VST "VST: ReaComp (Cockos)" reacomp.dll 0 "" 1919247729
BBBBAQAAAA==
>
"""

FROZEN_TRACK_CHUNK: str = """\
<TRACK
NAME frozen
<FREEZE 1
<ITEM
POSITION 0
>
>
MUTESOLO 0 0 0
>
"""

ID_CHUNK: str = "<TRACK\nID {\nGUID1\n}\nNAME x\n>\n"

SMALL_TRACK: str = "<TRACK\nMUTESOLO 0 0 0\n>\n"
