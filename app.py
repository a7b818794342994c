# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py new form.json
  python app.py scan form.json "1.900*^1.910*^1.890*^..."
  python app.py set form.json 1 odAverage 1.902
  python app.py add-row form.json
  python app.py export form.json --out exports/
  python app.py submit form.json
"""

from qclog.adapters.cli import main

if __name__ == "__main__":
    main()
