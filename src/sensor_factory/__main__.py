from sensor_factory.main import main

raise SystemExit(main())
