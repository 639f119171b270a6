"""Built-in assets used when a receipt carries no logo of its own."""

from __future__ import annotations

import base64

# 64x64 PNG cafe logo.
DEFAULT_LOGO_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAEAAAABACAYAAACqaXHeAAAACXBIWXMAAAsTAAALEwEAmpwY"
    "AAAAAXNSR0IArs4c6QAAAARnQU1BAACxjwv8YQUAAApMSURBVHgB7Vl9bBxHFX/7ed/fd747"
    "f57tI3Yc4yS4SZSQ0EOCAhVIjcCRioQEEqoEEohSFUFbhCNAQiCohEQDUkWFhJBS/9GWjyIK"
    "Ci6NMG2JaJNWbaLGbdWksRPHn2ef7du75c3s7N3u3q59TtI2VfcnjW5v583Mm9+8efPmLYAL"
    "Fy5cuHDhwoULFy5cfADBwbsIVVW5ZF+yLxqNtoIghLkqJ6q8qqhlpbgcD05MP3V6hYjB+xiE"
    "UJ48FEYLorVy//79PtAm2FBEWXzUoT8dPNzE4HAaVNlQMvQ5/JmzE4pn458CBwKwzNq18UeD"
    "o6JHOpHfl2+nL0ZHby4ihu8alshvMB48gj/LlAqANTtZQRafAGcC1Oxw1m9tE8pE72F9qoIk"
    "nIwN90RoxejNZRGvo5JV/K0AOBOAWIQNCIh3t9xmbRDNxO/R6zmOI2Ookkc6RitvAhK47PZs"
    "FzROpoGAzoOdMdhg8qSIPnHM2i6Sid1rkatyPEeIXo/1xDpB8xPvqjM3gvMEPL+AJgiIZOIj"
    "sAkBYOM7Iq2x79jKcqCQX0EQvkwF30NruIqFmiZsQIDoEf8JmxOgpgoDQWM7RwK0UsFtQXzD"
    "I0R2ZGREgHcI1Mxi2ZrJ0XftO9vbHBRbteljFZogINaVut3YKJKNfW+zNrglqkjEk0R+9B05"
    "JdDg0NSIl1cMbznZ6/0RNEFAcrgrayNzBqk8ZX0viMLjxrbNEADMQdbaqjfQJ1CzEmE/oKmR"
    "rjs/3NkDdSuYhkbzbyDAH/F/1SrjC/uOeyP+h2zaLsA1EADMEnA7/Aa2AH6zyU9cmJBx3f+N"
    "caxCzuOpyan7SV3vgd4W/GkBew+sGv+UltfusgoIkvSMR5aetmkbxqAnbNCQ36x/47tqtdoP"
    "Nwi1VUbz0s93UorkpTfofQCcV8PqAxQwe3A1vT096ORDQi2hO/SGkbbY/dZ6nucnOZGbwBXX"
    "+1WIM8T33yVtbowfQDUxPr+PBTgmBfr39idwwAtgb/6klPRuug9s77KTyX8m7wHNAhv6wL38"
    "pN4+2ha1I3qeVV/mBX6dvBNF8QAYQvLrA56pjEW1QUEkBJn+HWy8H2sEeAK+b9vUL+r1SOTb"
    "NvVLmxBw1aDtUjgcjjeseoFdxq41PuAE7o8s4rIOrhNiV9dAAE7wRWhc4Wf1etkn/8Guj1wh"
    "F2UEfN+JgNqNswCmm6eBjLn2gfb4VrcEh4N7YeMV3qyUDP011PvD/lG9MpqNHraTiWQiR2h9"
    "a/wHNvUztppT76JykY5IL2ingoJk/wu2CE7yYXjLbbjCTRHQ2tfaZ1ef6Ens0QfL786n7GRQ"
    "8ae2RMAI0ChQkqS76eQ5rqzLYxImBFu8L5DG1SYmuiEB3rD/qEO9FXZRYpERcLQpAhBI2hjH"
    "88ZbKfVZsp8GbM2hpbtlCJz3vdpkHUltkf1/zlqHZlnG94tsgkV8XiDv7PomN8i4PQFXrHqT"
    "fZ4eSgdsdCLPtgkaW6BT+r2egDAU4pWnrJNl8cEZ/H3JjgCAa7YgWoKp4JFER+qBZghgwPBc"
    "fsQSt9CS26U5VSsavON6af12k5HizpED3seTbck7wbyPMMep8oVCYTe+zZi04Hm1Y3dfK1wf"
    "1NWF1S/JftnO3MVANLDLGw1+HMutWD6Ggdmt2z667WC6v/0hope1wdzU3CdhMwzdNqSbUL2g"
    "NbBtQUAsgVoBuXxgoHSUvZ8xthG90lQ4E/46XKcF4Nhz6Q9lvwhb25KqIUKs62SfdDUjkUvs"
    "c+iURlhywHcnmTgzMaMZzljkX0OZ520UK8NWfAlHw96fwvUSqfV13m7OpqMhlArdt3Rl6ccW"
    "mYtY2g3/iYf3Jrd3tc688qZ+GyQEJCwyeqhrQqQzEo/FYxG1ikbEc2q1UuUr5crC9Pnpk0pZ"
    "sbvIEAcWg+vHMpbghhKiJJLbmdl0PGItLic8Ymh7r+Tx/BrM5M1CcyvxhtPYHp/nxqy0c1Fs"
    "52z844/6/15cWHmO16aGCQDVj5740fkL7O7BkVxX6WcA7JxgFPASf5zja3zgqpM/xDB4nhFH"
    "ghRBlPmTa0X7hHG8I/7by5OXB9Hka/kAHN/8cYUD/X7CG0YXauIAQk0SzLJqpRI+dPCQOD4+"
    "bkvEZvk0xyhqy1fPG5mt2SLy+byHFOMFyaQMxt9fwC91Iqdlfwh050TXvFrBjAs+KaIyX5wu"
    "nqAdjUKVhLxLs0uHVxZWhjjcJVLAc14QuT8XrxS1OJzJGZ/b9rYlFl9f/KyypuxdLylhOSi+"
    "Lcv+vy187RvjyGpVl8sN5/rRuloqKl8hcT4n88tvTrz2AtNN+1KE8omezJ714uohtLIMWXD0"
    "MaXyytpkuCP13KUzb7zK5vMYWtg8Jk2+YsuQ5JOuQhP7SfJKrxD5QDzwadAiukaPzoIp/IhB"
    "U1SF0VGRfBwliVWHK3CtYEj7V10nfP6LaWyP9LJeR6xWCkg7gexvLRNQC4DYIqoslbeYy+W8"
    "iW2JttRAKuNohTgY8eZkk65aEyHsqww5xspI1D+QybvZIGRP0YwMlkms+w/Uz2L9yJymA4ji"
    "JzSlqKJV1ucc5vGeNbTRfytkgnh+j5kI0Po3QmV60fpYb3qQDiWJE+x9hen4FmwE/RufDmR6"
    "3Diw4KkHEon2RBtbYT0oUgVZ+LxeT/eZNnAtaOIl8efsv8JIqAoe4WGLGrOsHSUBU9FPB2KB"
    "nzgRwMLbuh71OGOSl/kfZgYyO3RZjFjFQqHxi7Uj9JXUC362+pNeF0wGHwSz2V4wNcbpBeLh"
    "b4FxS2i/1hi95hSJM83msx8Bs9WReOJBCwETJj090i+hbqFO2+pcdFc0aufoN/LgvHVStUeV"
    "u2xwlARRfRJA3CVah7K+1m9qDfR2aOpyeHhYGjkyUhtn9tJsyjQkCep5mvMzomrUsbxW/mbH"
    "YEce/dJx/H+ZvuUsY3HQO//CfPM3QgJkmu5LqFvAE3p3zMRrSQf6UUKiCQw6qizLdzDnQ5Ql"
    "HzNJ0vIQPi+irMLakM9a5/Rj1Bv15qAesBBzrkh+zzG85Bwz6SGJL3bf0t3Xs7fnlq7Bru3t"
    "g91DnTs7d5DTovtAdxfpK5PvHEDf8V8wW5Oa7KYJmqYJeN6BAOp9k91JLdujOTn0+jUTLDP/"
    "QDyz/u3uV6RdOq3d11musWrIOZYMhFaZR/8faYMTeQwcTBsvXFq+UL++c7SP0x3DHb2CJD5T"
    "k+VqafnmgU7rLJiPpnFjvb6f5ADmD2zy/mxCL4VaKVF0e+htkFzyRXkd7Cc2E0qEDrNhOMz/"
    "n3AiIJKOPhzNRcn2uwiGlTaRor27lEwmQ3Y+wPY8JII7duxQMWw0+QH0otVREqToMAQ4uYFc"
    "hvNznUoVPGvlysUOOfXWqVOnyIrquX8NKvUR9Kl732Car5TyaAnBdWV9Zk1Ze3X69PRyTS9U"
    "f+DIgOQr+cRSsVTXhXmKlSsryp7UnvLY2FilZ7gnUq7ANq9PSJPzpYphW0VZnyoue16eOXt2"
    "ieYMx6gTduHChQsXLly4cOHChQsX/wfVg12NvcRopQAAAABJRU5ErkJggg=="
)


def default_logo_bytes() -> bytes:
    return base64.b64decode(DEFAULT_LOGO_PNG_B64)


def default_logo_data_url() -> str:
    return f"data:image/png;base64,{DEFAULT_LOGO_PNG_B64}"
