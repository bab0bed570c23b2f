"""MidiExporter: Writes a song's voiced chord progression to a MIDI file."""

from midiutil import MIDIFile

from chordbook.voicing_strategy import VoicedChord

# In midiutil Format 1 MIDI, track 0 is the conductor/tempo track.
TRACK_CONDUCTOR = 0  # Tempo only, never receives notes
TRACK_CHORDS = 1     # Chord tones, top staff
TRACK_BASS = 2       # Bass notes, bottom staff

CHANNEL_CHORDS = 0
CHANNEL_BASS = 1

# General MIDI program numbers (0-based)
PROGRAM_PIANO = 0            # Acoustic Grand Piano
PROGRAM_STEEL_GUITAR = 25    # Acoustic Guitar (steel)


class MidiExporter:
    """
    Writes a list of VoicedChords as a block-chord progression.

    Track layout (Format 1, 3 internal tracks)
    ------------------------------------------
    Track 0 — conductor track (tempo only)

    Track 1 — "Chords": every voiced chord tone, one chord per slot.

    Track 2 — "Bass": the voicing's bass notes, if any.

    Timing
    ------
    Chords are laid end to end, each lasting ``beats_per_chord`` beats.
    An empty voicing (a fully muted guitar shape) still takes its slot as
    a rest, so the progression keeps its shape.
    """

    DEFAULT_TEMPO = 90        # BPM
    DEFAULT_BEATS = 4         # one 4/4 bar per chord
    DEFAULT_VELOCITY = 80     # MIDI velocity for chord tones (0-127)
    BASS_VELOCITY = 68        # Slightly softer bass notes

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        beats_per_chord: float = DEFAULT_BEATS,
        program: int = PROGRAM_PIANO,
        velocity: int = DEFAULT_VELOCITY,
    ) -> None:
        """
        Args:
            tempo:           Playback tempo in beats per minute.
            beats_per_chord: Length of each chord slot in beats.
            program:         General MIDI program for both data tracks.
            velocity:        MIDI note-on velocity for chord tones.
        """
        if beats_per_chord <= 0:
            raise ValueError("beats_per_chord must be positive.")
        self.tempo = tempo
        self.beats_per_chord = beats_per_chord
        self.program = program
        self.velocity = velocity

    def build(self, voiced_chords: list[VoicedChord]) -> MIDIFile:
        """Assemble the MIDIFile in memory without writing it."""
        midi = MIDIFile(numTracks=3, removeDuplicates=False, deinterleave=False)

        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)
        midi.addTrackName(TRACK_CHORDS, 0, "Chords")
        midi.addTrackName(TRACK_BASS, 0, "Bass")
        midi.addProgramChange(TRACK_CHORDS, CHANNEL_CHORDS, 0, self.program)
        midi.addProgramChange(TRACK_BASS, CHANNEL_BASS, 0, self.program)

        for slot, vc in enumerate(voiced_chords):
            start_beat = slot * self.beats_per_chord

            for pitch in vc.bass_notes:
                midi.addNote(
                    track=TRACK_BASS,
                    channel=CHANNEL_BASS,
                    pitch=pitch,
                    time=start_beat,
                    duration=self.beats_per_chord,
                    volume=self.BASS_VELOCITY,
                )

            for pitch in vc.notes:
                midi.addNote(
                    track=TRACK_CHORDS,
                    channel=CHANNEL_CHORDS,
                    pitch=pitch,
                    time=start_beat,
                    duration=self.beats_per_chord,
                    volume=self.velocity,
                )

        return midi

    def export(self, voiced_chords: list[VoicedChord], output_path: str) -> None:
        """
        Render voiced chords to a Standard MIDI File.

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(voiced_chords)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
