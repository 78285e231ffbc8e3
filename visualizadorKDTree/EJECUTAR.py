import os
import subprocess
import sys

def main():
    # Ruta absoluta de la app del KD-Tree
    ruta_app = os.path.join(os.path.dirname(os.path.abspath(__file__)), "run_app.py")

    # Ejecutar streamlit, pasando opciones extra (p.ej. --server.port 8502)
    comando = [sys.executable, "-m", "streamlit", "run", ruta_app, *sys.argv[1:]]

    print("Iniciando visualizador de KD-Tree...\n")
    return subprocess.run(comando).returncode

if __name__ == "__main__":
    sys.exit(main())
