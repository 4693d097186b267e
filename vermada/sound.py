"""Sound effects and music, including sounds placed relative to the listener."""

from __future__ import annotations

import enum
import math
from typing import Any, Callable

import pygame

from vermada.util import get_angle, get_distance

CHANNEL_COUNT = 8
MAX_VOLUME = 255


class SoundId(enum.IntEnum):
    JUMP = 0
    COIN = 1
    FINISH = 2
    CLOCK = 3
    NUDGE = 4
    WIPE = 5
    EXPIRED = 6
    NEGATIVE = 7
    FANFARE = 8
    DEATH = 9
    ITEM = 10
    TIP = 11


class Channel(enum.IntEnum):
    ANY = -1
    PLAYER = 0
    CLOCK = 1
    WIDGET = 2


SOUND_FILES: dict[SoundId, str] = {
    SoundId.JUMP: "sound/331381__qubodup__public-domain-jump-sound.mp3",
    SoundId.COIN: "sound/135936__bradwesson__collectcoin.mp3",
    SoundId.FINISH: "sound/ulrichmetzner__churchbell.mp3",
    SoundId.CLOCK: "sound/clock.mp3",
    SoundId.NUDGE: "sound/nudge.mp3",
    SoundId.WIPE: "sound/wipe.mp3",
    SoundId.EXPIRED: "sound/expired.mp3",
    SoundId.NEGATIVE: "sound/negative.mp3",
    SoundId.FANFARE: "sound/449069__ricniclas__fanfare.mp3",
    SoundId.DEATH: "sound/fail.mp3",
    SoundId.ITEM: "sound/item.mp3",
    SoundId.TIP: "sound/tip.mp3",
}


def positional_params(src_x: int, src_y: int, dest_x: int, dest_y: int,
                      screen_width: int) -> tuple[int, int | None] | None:
    """Return (distance volume, bearing) for a positional sound, or None if out of range.

    The volume runs from 0 (at the listener) to 255 (a screen width away). The
    bearing is None when the source is too close for direction to matter.
    """
    distance = get_distance(dest_x, dest_y, src_x, src_y)
    if distance > screen_width:
        return None
    volume = MAX_VOLUME / screen_width * distance
    if distance >= screen_width // 8:
        bearing = 360 - get_angle(src_x, src_y, dest_x, dest_y)
        return int(volume), int(bearing)
    return int(volume), None


def _stereo(volume: int, bearing: int | None) -> tuple[float, float]:
    loudness = 1.0 - volume / MAX_VOLUME
    if bearing is None:
        return loudness, loudness
    pan = math.sin(math.radians(bearing))
    return loudness * min(1.0, 1.0 - pan), loudness * min(1.0, 1.0 + pan)


class SoundPlayer:
    """Loaded sound effects, the current music and per-channel playback."""

    def __init__(self, loader: Callable[[str], Any] | None, screen_width: int) -> None:
        self._loader = loader if loader is not None else pygame.mixer.Sound
        self.screen_width = screen_width
        self.sounds: dict[SoundId, Any] = {}
        self.music: str | None = None
        self.channel_volumes: dict[int, int] = {}

    def load_sounds(self, locate: Callable[[str], str] = str) -> None:
        """Load every sound effect, resolving each path with ``locate``."""
        self.sounds = {sound_id: self._loader(locate(path))
                       for sound_id, path in SOUND_FILES.items()}
        self.channel_volumes = {}

    def load_music(self, filename: str) -> None:
        """Stop any current music and load ``filename`` as the new track."""
        mixer_ready = pygame.mixer.get_init()
        if self.music is not None and mixer_ready:
            pygame.mixer.music.stop()
        self.music = filename
        if mixer_ready:
            pygame.mixer.music.load(filename)

    def play_music(self, loop: bool = True) -> bool:
        """Start the loaded music; return False when there is none to play."""
        if self.music is None or not pygame.mixer.get_init():
            return False
        pygame.mixer.music.play(-1 if loop else 0)
        return True

    def _start(self, sound_id: SoundId, channel: int) -> Any:
        sound = self.sounds.get(sound_id)
        if sound is None or not pygame.mixer.get_init():
            return None
        if channel < 0:
            return sound.play()
        if channel >= pygame.mixer.get_num_channels():
            return None
        mixer_channel = pygame.mixer.Channel(channel)
        mixer_channel.play(sound)
        return mixer_channel

    def play(self, sound_id: SoundId, channel: int) -> bool:
        """Play a sound on ``channel`` (-1 for any); return True if it started."""
        return self._start(sound_id, channel) is not None

    def play_positional(self, sound_id: SoundId, channel: int, src_x: int, src_y: int,
                        dest_x: int, dest_y: int) -> tuple[int, int | None] | None:
        """Play a sound heard at (dest) from (src); return the parameters used."""
        params = positional_params(src_x, src_y, dest_x, dest_y, self.screen_width)
        if params is None:
            return None
        volume, bearing = params
        if volume >= self.channel_volumes.get(channel, 0):
            mixer_channel = self._start(sound_id, channel)
            if mixer_channel is not None:
                mixer_channel.set_volume(*_stereo(volume, bearing))
        return params

    def channel_done(self, channel: int) -> None:
        """Note that ``channel`` has finished playing."""
        self.channel_volumes[channel] = 0

    def pause(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.pause()

    def resume(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.unpause()

    def destroy(self) -> None:
        """Release every sound and the music."""
        self.sounds.clear()
        if self.music is not None and pygame.mixer.get_init():
            pygame.mixer.music.stop()
        self.music = None