import json
import os
import sys
from tempfile import TemporaryDirectory

from jupyter_client.kernelspec import install_kernel_spec

kernel_json = {
    "argv": [
        sys.executable,
        "-m", "calysto_xy",
        "-f", "{connection_file}"
    ],
    "display_name": "Calysto XY",
    "language": "asm",
    "codemirror_mode": "gas",
}


def install_my_kernel_spec(user=True):
    with TemporaryDirectory() as td:
        os.chmod(td, 0o755) # Starts off as 700, not user readable
        with open(os.path.join(td, 'kernel.json'), 'w') as f:
            json.dump(kernel_json, f, sort_keys=True)

        print('Installing Jupyter kernel spec')
        install_kernel_spec(td, 'calysto_xy', user=user, replace=True)


def main(argv=None):
    install_my_kernel_spec()


if __name__ == '__main__':
    main()
