# Nombre de archivo: metrics.py
# Ubicación de archivo: core/metrics.py
# Descripción: Acumulador simple de métricas de envío de encuestas (conteo, latencia y resultado)

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class Metrics:
    """Acumulador básico de métricas de envíos."""

    total_envios: int = 0
    total_latency: float = 0.0
    por_estado: Counter = field(default_factory=Counter)

    def record(self, estado: str, latency: float) -> None:
        """Registra un envío terminado, su resultado y su latencia."""
        self.total_envios += 1
        self.total_latency += latency
        self.por_estado[estado] += 1

    def snapshot(self) -> dict[str, object]:
        """Devuelve un resumen con promedio de latencia en ms."""
        promedio = self.total_latency / self.total_envios if self.total_envios else 0.0
        return {
            "total_envios": self.total_envios,
            "average_latency_ms": promedio * 1000,
            "por_estado": dict(self.por_estado),
        }

    def reset(self) -> None:
        """Reinicia los contadores."""
        self.total_envios = 0
        self.total_latency = 0.0
        self.por_estado.clear()


metrics = Metrics()

__all__ = ["Metrics", "metrics"]
