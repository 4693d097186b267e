"""Short-lived particle effects for coins, power-ups, splashes and deaths."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

GRAVITY = 0.25


@dataclass
class Particle:
    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    life: int = 0
    weightless: bool = False
    color: tuple[int, int, int] = (0, 0, 0)
    image: Any = None


class ParticleSystem:
    """The live particles of a stage."""

    def __init__(self, rng: random.Random | None = None, image: Any = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.image = image
        self.particles: list[Particle] = []

    def _spawn(self, x: int, y: int, dx: float, dy: float, life: int,
               color: tuple[int, int, int], weightless: bool = False) -> Particle:
        particle = Particle(x, y, dx, dy, life, weightless, color, self.image)
        self.particles.append(particle)
        return particle

    def step(self) -> None:
        """Move every particle one frame and drop those whose life ran out."""
        alive = []
        for particle in self.particles:
            particle.x += particle.dx
            particle.y += particle.dy
            if not particle.weightless:
                particle.dy += GRAVITY
            particle.life -= 1
            if particle.life > 0:
                alive.append(particle)
        self.particles = alive

    def draw(self, renderer: Any, camera_x: int, camera_y: int) -> None:
        """Blit each particle centred on its position, tinted with its colour."""
        for particle in self.particles:
            renderer.blit_atlas_image(
                particle.image,
                int(particle.x - camera_x),
                int(particle.y - camera_y),
                True,
                False,
                particle.color,
            )

    def add_coin_particles(self, x: int, y: int) -> None:
        rand = self.rng.randrange
        for _ in range(12):
            dx = (100 - rand(200)) / 100
            dy = (100 - rand(200)) / 100
            life = 15 + rand(45)
            color = (128 + rand(128), rand(64), 128 + rand(128))
            self._spawn(x, y, dx, dy, life, color, weightless=True)

    def add_powerup_particles(self, x: int, y: int) -> None:
        rand = self.rng.randrange
        for _ in range(25):
            dx = (200 - rand(400)) / 100
            dy = (200 - rand(400)) / 100
            life = 15 + rand(15)
            color = (128 + rand(128), rand(64), 128 + rand(128))
            self._spawn(x, y, dx, dy, life, color, weightless=True)

    def add_church_splash_particles(self, x: int, y: int) -> None:
        rand = self.rng.randrange
        for _ in range(20):
            dx = (150 - rand(300)) / 100
            dy = -(200 + rand(400)) / 100
            life = 15 + rand(30)
            shade = 128 + rand(128)
            self._spawn(x, y, dx, dy, life, (shade, shade, 255))

    def add_death_particles(self, x: int, y: int) -> None:
        rand = self.rng.randrange
        for _ in range(100):
            dx = (200 - rand(400)) / 100
            dy = -(200 + rand(600)) / 100
            life = 15 + rand(45)
            shade = 128 + rand(128)
            self._spawn(x, y, dx, dy, life, (255, shade, shade))

    def clear(self) -> None:
        self.particles.clear()

    def __len__(self) -> int:
        return len(self.particles)