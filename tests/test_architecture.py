#!/usr/bin/env python3
'''Unit tests for target architectures'''

from pathlib import Path
import sys
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from target_features import Architecture


class TestArchitecture(unittest.TestCase):

    def test_str_is_member_name(self):
        self.assertEqual(str(Architecture.X86), 'X86')
        self.assertEqual(str(Architecture.RISCV), 'RISCV')

    def test_values_are_table_keys(self):
        self.assertIs(Architecture('aarch64'), Architecture.AARCH64)
        self.assertIs(Architecture('unsupported'), Architecture.UNSUPPORTED)

    def test_from_target_arch(self):
        '''Compiler target_arch names map onto their family'''
        cases = {
            'x86': Architecture.X86,
            'x86_64': Architecture.X86,
            'arm': Architecture.ARM,
            'aarch64': Architecture.AARCH64,
            'riscv32': Architecture.RISCV,
            'riscv64': Architecture.RISCV,
            'mips64': Architecture.MIPS,
            'powerpc64': Architecture.POWERPC,
            'wasm32': Architecture.WASM,
            'bpf': Architecture.BPF,
            'hexagon': Architecture.HEXAGON,
        }
        for target_arch, expected in cases.items():
            self.assertIs(Architecture.from_target_arch(target_arch), expected, target_arch)

    def test_unknown_target_arch_is_unsupported(self):
        for target_arch in ('sparc64', 's390x', 'X86_64', ''):
            self.assertIs(Architecture.from_target_arch(target_arch), Architecture.UNSUPPORTED)


if __name__ == '__main__':
    unittest.main()
