import logging
import math
import os
import subprocess
import sys
from typing import List

logger = logging.getLogger(__name__)


class LivenessProbe:
    def probe(self, address: str, timeout: float) -> bool:
        raise NotImplementedError("Реализуйте probe в наследнике")


class PingProbe(LivenessProbe):
    """
    Один ICMP echo через системный ping, без повторов.
    Хосты за файрволом, режущим ICMP, всегда будут offline.
    """

    windows = os.name == "nt"
    # BSD-ping на macOS принимает -W в миллисекундах
    macos = sys.platform == "darwin"

    def build_command(self, address: str, timeout: float) -> List[str]:
        if self.windows:
            return ["ping", "-n", "1", "-w", str(int(timeout * 1000)), address]
        if self.macos:
            return ["ping", "-c", "1", "-W", str(int(timeout * 1000)), address]
        return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), address]

    def probe(self, address: str, timeout: float) -> bool:
        creationflags = subprocess.CREATE_NO_WINDOW if self.windows else 0
        try:
            result = subprocess.run(
                self.build_command(address, timeout),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                creationflags=creationflags,
                text=True,
                timeout=timeout + 2,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("[PING] %s: %s", address, e)
            return False

        # Windows отвечает кодом 0 и на "Destination host unreachable"
        return result.returncode == 0 and "ttl=" in result.stdout.lower()
