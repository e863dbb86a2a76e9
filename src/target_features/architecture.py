"""
Target architectures

Instruction-set families the feature catalog has entries for.
"""

from enum import Enum
from typing import Dict


class Architecture(Enum):
    """Supported target architectures"""
    ARM = "arm"
    AARCH64 = "aarch64"
    BPF = "bpf"
    HEXAGON = "hexagon"
    MIPS = "mips"
    POWERPC = "powerpc"
    RISCV = "riscv"
    WASM = "wasm"
    X86 = "x86"                  # x86 and x86-64
    UNSUPPORTED = "unsupported"  # Another target, which doesn't have features

    def __str__(self):
        return self.name

    @classmethod
    def from_target_arch(cls, target_arch: str) -> "Architecture":
        """Map a compiler `target_arch` name to its architecture family"""
        return _TARGET_ARCH_MAP.get(target_arch, cls.UNSUPPORTED)


_TARGET_ARCH_MAP: Dict[str, Architecture] = {
    "arm": Architecture.ARM,
    "aarch64": Architecture.AARCH64,
    "bpf": Architecture.BPF,
    "hexagon": Architecture.HEXAGON,
    "mips": Architecture.MIPS,
    "mips64": Architecture.MIPS,
    "mips32r6": Architecture.MIPS,
    "mips64r6": Architecture.MIPS,
    "powerpc": Architecture.POWERPC,
    "powerpc64": Architecture.POWERPC,
    "riscv32": Architecture.RISCV,
    "riscv64": Architecture.RISCV,
    "wasm32": Architecture.WASM,
    "wasm64": Architecture.WASM,
    "x86": Architecture.X86,
    "x86_64": Architecture.X86,
}
