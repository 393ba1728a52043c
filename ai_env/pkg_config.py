# ai_env/pkg_config.py

pkg_config = {
    "venv_dir": "~/Virtual_Env/ai",
    "python_bin": "python3",
    "sudo_cmd": "sudo",
    "log_dir": None,  # None -> current working directory
    "base_pkgs": [
        "numpy", "pandas", "scipy", "scikit-learn", "scikit-image",
        "matplotlib", "seaborn", "pillow", "opencv-python",
        "statsmodels", "sympy", "cython", "joblib", "tqdm", "requests", "beautifulsoup4", "lxml",
        "pyarrow",
        "jupyterlab", "ipykernel",
    ],
    # installed on its own first, it may fail on some Python/OS combos
    "tensorflow_pkg": "tensorflow",
    "torch_stack": ["torch", "torchvision", "torchaudio"],
    "torch_fallback_index": "https://download.pytorch.org/whl/cpu",
    "ml_pkgs": [
        "xgboost", "lightgbm", "catboost",
        "transformers", "datasets", "tokenizers", "sentencepiece", "accelerate", "diffusers", "einops",
        "pytorch-lightning",
        "onnx", "onnxruntime",
    ],
    "requirements": None,
    "kernel_name": "ai",
    "kernel_display_name": "Python (ai)",
    "register_kernel": True,
    "system_packages": True,
    "strict": False,
    "progress": True,
}

LIST_KEYS = ("base_pkgs", "torch_stack", "ml_pkgs")
BOOL_KEYS = ("register_kernel", "system_packages", "strict", "progress")
STR_KEYS = ("venv_dir", "python_bin", "torch_fallback_index", "kernel_name", "kernel_display_name")
OPTIONAL_STR_KEYS = ("sudo_cmd", "log_dir", "requirements", "tensorflow_pkg")
